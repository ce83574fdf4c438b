"""Splitting of Vue single-file components into their template and script zones."""

from __future__ import annotations

import re
from typing import NamedTuple

# Greedy so nested <template v-if> blocks stay inside the outer template
TEMPLATE_BLOCK = re.compile(r"<template(?:\s[^>]*)?>(.*)</template>", re.DOTALL | re.IGNORECASE)
SCRIPT_BLOCK = re.compile(r"<script(\s[^>]*)?>(.*?)</script>", re.DOTALL | re.IGNORECASE)
SETUP_ATTRIBUTE = re.compile(r"(?:^|\s)setup(?:\s|=|$)", re.IGNORECASE)


class ComponentBlocks(NamedTuple):
    """Zones of a single-file component; absent zones are None."""

    template: str | None
    script: str | None
    script_setup: str | None


def split_component(content: str) -> ComponentBlocks:
    """
    Split component source into template, script and ``<script setup>`` zones.

    Only the first plain script and the first setup script are kept, matching
    what the component compiler accepts.
    """
    template: str | None = None
    template_match = TEMPLATE_BLOCK.search(content)
    if template_match:
        template = template_match.group(1)

    script: str | None = None
    script_setup: str | None = None
    for match in SCRIPT_BLOCK.finditer(content):
        attributes = match.group(1) or ""
        body = match.group(2)
        if SETUP_ATTRIBUTE.search(attributes):
            if script_setup is None:
                script_setup = body
        elif script is None:
            script = body

    return ComponentBlocks(template=template, script=script, script_setup=script_setup)
