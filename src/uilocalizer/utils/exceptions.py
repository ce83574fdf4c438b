"""
Exception classes for the localization pipeline.

Fatal preconditions (missing source directory, missing upstream artifact,
missing credentials) are raised as non-recoverable errors and end the stage.
Provider and parse failures are recoverable and are handled per item.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    FILESYSTEM = "filesystem"
    ARTIFACT = "artifact"
    PROVIDER = "provider"
    PARSING = "parsing"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class LocalizerError(Exception):
    """Base exception class for localization pipeline errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.context: object | None = context
        self.recoverable: bool = recoverable


class ConfigurationError(LocalizerError):
    """Configuration-related errors, including missing credentials."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
        )


class DirectoryNotFoundError(LocalizerError):
    """The source directory to scan or rewrite does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Source directory does not exist: {path}",
            category=ErrorCategory.FILESYSTEM,
            severity=ErrorSeverity.HIGH,
            context=path,
            recoverable=False,
        )
        self.path: Path = path


class ArtifactNotFoundError(LocalizerError):
    """A JSON artifact produced by an earlier stage is missing."""

    def __init__(self, path: Path, hint: str | None = None) -> None:
        message = f"{path.name} not found at {path}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(
            message,
            category=ErrorCategory.ARTIFACT,
            severity=ErrorSeverity.HIGH,
            context=path,
            recoverable=False,
        )
        self.path: Path = path


class ArtifactError(LocalizerError):
    """An artifact exists but does not have the expected shape."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.ARTIFACT,
            severity=ErrorSeverity.HIGH,
            context=path,
            recoverable=False,
        )


class ProviderError(LocalizerError):
    """The translation provider rejected a request or returned nothing usable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PROVIDER,
            severity=ErrorSeverity.MEDIUM,
            context=status_code,
            recoverable=True,
        )
        self.status_code: int | None = status_code


class ScriptParseError(LocalizerError):
    """Structural parsing of a script block failed."""

    def __init__(self, message: str, filename: str | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.PARSING,
            severity=ErrorSeverity.LOW,
            context=filename,
            recoverable=True,
        )
