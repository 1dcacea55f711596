"""
Discovery of the external gettext executables.

Two strategies exist: on macOS with Homebrew the keg-only ``gettext`` formula
is used, everywhere else the executables are looked up on ``PATH``.
``select_resolver`` picks the right one so the pipeline never needs to know
where the tools came from.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import NamedTuple

from typing_extensions import override

from ..config.schema import ToolsConfig
from ..utils.core.exceptions import PackageNotInstalledError, ToolNotFoundError

logger = logging.getLogger(__name__)

HOMEBREW_EXECUTABLE = "brew"


class ToolSet(NamedTuple):
    """Resolved absolute paths of the four gettext tools."""

    msginit: Path
    msgmerge: Path
    msgfmt: Path
    xgettext: Path


class ToolResolver(ABC):
    """Turn tool names into executable paths."""

    def __init__(self, tools_config: ToolsConfig) -> None:
        self.tools_config: ToolsConfig = tools_config

    @property
    @abstractmethod
    def description(self) -> str:
        """Where this resolver looks, for error messages."""

    @abstractmethod
    def resolve(self, name: str) -> Path:
        """
        Resolve one executable.

        Raises:
            ToolNotFoundError: If the executable cannot be found
        """

    def resolve_all(self) -> ToolSet:
        """
        Resolve all four tools.

        Raises:
            ToolNotFoundError: For the first tool that cannot be found
            PackageNotInstalledError: If the package manager lacks gettext
        """
        tool_set = ToolSet(
            msginit=self.resolve(self.tools_config.msginit),
            msgmerge=self.resolve(self.tools_config.msgmerge),
            msgfmt=self.resolve(self.tools_config.msgfmt),
            xgettext=self.resolve(self.tools_config.xgettext),
        )
        for field, path in zip(ToolSet._fields, tool_set):
            logger.debug(f"Using {field}: {path}")
        return tool_set


class SearchPathResolver(ToolResolver):
    """Look tools up on the executable search path."""

    def __init__(self, tools_config: ToolsConfig, path: str | None = None) -> None:
        super().__init__(tools_config)
        self.path: str | None = path

    @property
    @override
    def description(self) -> str:
        return "PATH"

    @override
    def resolve(self, name: str) -> Path:
        found = shutil.which(name, path=self.path)
        if found is None:
            raise ToolNotFoundError(name, self.description)
        return Path(found)


class HomebrewResolver(ToolResolver):
    """Look tools up in the prefix of the Homebrew gettext formula."""

    def __init__(self, tools_config: ToolsConfig, brew: Path) -> None:
        super().__init__(tools_config)
        self.brew: Path = brew
        self._bin_dir: Path | None = None

    @property
    @override
    def description(self) -> str:
        return f"Homebrew formula '{self.tools_config.homebrew_formula}'"

    @property
    def bin_dir(self) -> Path:
        """
        ``bin`` directory of the installed formula.

        Raises:
            PackageNotInstalledError: If brew does not know the formula
        """
        if self._bin_dir is None:
            formula = self.tools_config.homebrew_formula
            completed = subprocess.run(
                [str(self.brew), "--prefix", "--installed", formula],
                capture_output=True,
                text=True,
                check=False,
            )
            prefix = completed.stdout.strip()
            if completed.returncode != 0 or not prefix:
                raise PackageNotInstalledError(HOMEBREW_EXECUTABLE, formula)
            self._bin_dir = Path(prefix) / "bin"
            logger.debug(f"Homebrew {formula} prefix: {prefix}")
        return self._bin_dir

    @override
    def resolve(self, name: str) -> Path:
        candidate = self.bin_dir / name
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return candidate
        raise ToolNotFoundError(name, f"{self.description} ({self.bin_dir})")


def select_resolver(
    tools_config: ToolsConfig, platform: str | None = None
) -> ToolResolver:
    """
    Pick the resolver for the current platform.

    Args:
        tools_config: Tool names and Homebrew formula
        platform: Platform identifier, defaults to ``sys.platform``

    Returns:
        HomebrewResolver on macOS when ``brew`` is available, otherwise
        SearchPathResolver
    """
    platform = platform or sys.platform
    if platform == "darwin":
        brew = shutil.which(HOMEBREW_EXECUTABLE)
        if brew is not None:
            logger.debug(f"Using Homebrew at {brew} to locate gettext tools")
            return HomebrewResolver(tools_config, Path(brew))
    return SearchPathResolver(tools_config)
