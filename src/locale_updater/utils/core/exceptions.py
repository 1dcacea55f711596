"""
Basic exception classes for locale-updater.

This module contains the exception hierarchy shared by the resolver, the
catalog initializer and the pipeline without creating import cycles.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    USAGE = "usage"
    ENVIRONMENT = "environment"
    STATE = "state"
    TOOL = "tool"
    CONFIGURATION = "configuration"


class LocaleUpdaterError(Exception):
    """Base exception class for locale-updater specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.STATE,
        context: object | None = None,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.context: object | None = context


class UsageError(LocaleUpdaterError):
    """Invalid command-line usage (bad language code, missing module)."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(message, category=ErrorCategory.USAGE, context=context)


class ToolNotFoundError(LocaleUpdaterError):
    """A required external executable could not be located."""

    def __init__(self, tool: str, searched: str) -> None:
        super().__init__(
            f"Required executable '{tool}' not found in {searched}",
            category=ErrorCategory.ENVIRONMENT,
            context=tool,
        )
        self.tool: str = tool


class PackageNotInstalledError(LocaleUpdaterError):
    """The package manager is present but the gettext package is not installed."""

    def __init__(self, manager: str, package: str) -> None:
        super().__init__(
            f"{manager} is available but '{package}' is not installed "
            + f"(install it with: {manager} install {package})",
            category=ErrorCategory.ENVIRONMENT,
            context=package,
        )
        self.package: str = package


class LayoutError(LocaleUpdaterError):
    """An expected directory of the module layout does not exist."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message, category=ErrorCategory.STATE, context=path)
        self.path: Path = path


class LanguageExistsError(LocaleUpdaterError):
    """Attempt to initialize a language whose catalog directory already exists."""

    def __init__(self, language: str, path: Path) -> None:
        super().__init__(
            f"Cannot initialize language {language}, it exists already: {path}",
            category=ErrorCategory.STATE,
            context=path,
        )
        self.language: str = language
        self.path: Path = path


class ToolExecutionError(LocaleUpdaterError):
    """An external tool exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(
            f"'{Path(command[0]).name}' exited with status {returncode}{detail}",
            category=ErrorCategory.TOOL,
            context=command,
        )
        self.command: list[str] = command
        self.returncode: int = returncode
        self.stderr: str = stderr


class ConfigurationError(LocaleUpdaterError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message, category=ErrorCategory.CONFIGURATION, context=context
        )
