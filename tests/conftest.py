"""
Global test configuration fixtures for UI Localizer tests.

This module provides a validated pipeline configuration rooted in a temporary
work directory, a small front-end source tree, and an httpx mock transport
that plays the chat-completions provider.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from uilocalizer.config.schema import LocalizerConfig, PathsConfig, TranslationConfig

BATCH_ITEM = re.compile(r'^(\d+)\. "(.*)"$', re.MULTILINE)
SINGLE_ITEM = re.compile(r'^Text: "(.*)"$', re.MULTILINE)

Responder = Callable[[str], "str | httpx.Response"]


def chat_response(content: str) -> httpx.Response:
    """Build a successful chat-completions response carrying ``content``."""
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def prompt_of(request: httpx.Request) -> str:
    """Return the user prompt of a chat-completions request."""
    body = json.loads(request.content)  # pyright: ignore[reportAny]
    return body["messages"][-1]["content"]  # pyright: ignore[reportAny]


def batch_items(prompt: str) -> list[str]:
    """Texts listed in a batch prompt, in order."""
    return [match.group(2) for match in BATCH_ITEM.finditer(prompt)]


def single_item(prompt: str) -> str | None:
    """Text of a single-item prompt, or None for batch prompts."""
    match = SINGLE_ITEM.search(prompt)
    return match.group(1) if match else None


def fake_translate(text: str) -> str:
    return f"ZH:{text}"


def translating_responder(prompt: str) -> str:
    """Answer every prompt with ``ZH:``-prefixed translations."""
    text = single_item(prompt)
    if text is not None:
        return fake_translate(text)
    return "\n".join(
        f'{index}. "{fake_translate(item)}"' for index, item in enumerate(batch_items(prompt), start=1)
    )


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers the prompts it was sent."""

    def __init__(self, responder: Responder) -> None:
        self.prompts: list[str] = []
        self._responder: Responder = responder
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        prompt = prompt_of(request)
        self.prompts.append(prompt)
        result = self._responder(prompt)
        if isinstance(result, httpx.Response):
            return result
        return chat_response(result)


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Directory holding the JSON artifacts."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def localizer_config(work_dir: Path) -> LocalizerConfig:
    """
    Create a configuration suitable for tests.

    Delays are zero and an API key is set, so the translator can run against
    a mock transport without sleeping.

    Returns:
        LocalizerConfig: Validated configuration rooted in ``work_dir``
    """
    return LocalizerConfig(
        translation=TranslationConfig(
            api_key="test-key",
            model="gpt-4o-mini",
            target_language="简体中文",
            batch_size=10,
            batch_delay=0,
            item_delay=0,
        ),
        paths=PathsConfig(work_dir=work_dir),
    )


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """
    Create a small front-end project.

    Layout::

        app/
          App.vue
          components/Greeting.vue
          utils/messages.ts        (TypeScript, needs the pattern scan)
          node_modules/lib/index.js (excluded)
          vite.config.ts            (excluded)
    """
    root = tmp_path / "app"
    (root / "components").mkdir(parents=True)
    (root / "utils").mkdir()
    (root / "node_modules" / "lib").mkdir(parents=True)

    _ = (root / "App.vue").write_text(
        """<template>
  <div id="app">
    <h1>Hello World</h1>
    <input placeholder="Search products" :title="dynamicTitle" />
    <button @click="onClick">Save changes</button>
  </div>
</template>

<script>
import Greeting from './components/Greeting.vue'

export default {
  name: 'App',
  components: { Greeting },
}
</script>
""",
        encoding="utf-8",
    )
    _ = (root / "components" / "Greeting.vue").write_text(
        """<template>
  <p>Hello World</p>
  <p>{{ 'Welcome back' }}</p>
</template>

<script setup>
const message = 'Your profile was updated'
</script>
""",
        encoding="utf-8",
    )
    _ = (root / "utils" / "messages.ts").write_text(
        """export const notice: string = 'Something went wrong';
""",
        encoding="utf-8",
    )
    _ = (root / "node_modules" / "lib" / "index.js").write_text(
        "module.exports = 'Vendor message text'\n",
        encoding="utf-8",
    )
    _ = (root / "vite.config.ts").write_text(
        "export default { title: 'Build tool title' }\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture
def write_mapping(localizer_config: LocalizerConfig) -> Callable[[object], Path]:
    """Write a ``translation-mapping.json`` into the work directory."""

    def _write(mapping: object) -> Path:
        path = localizer_config.paths.mapping_path
        _ = path.write_text(json.dumps(mapping, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
