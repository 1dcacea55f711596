"""
Shared fixtures for locale-updater tests.

``fake_gettext`` replaces ``subprocess.run`` with an in-process stand-in for
the gettext tools: it records every command and writes the file named by
``--output=`` / ``--output-file=`` so tests can observe the pipeline's effect
on disk without gettext being installed.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from locale_updater.catalog.layout import CatalogLayout
from locale_updater.tools.resolver import ToolSet

TOOL_NAMES = ("msginit", "msgmerge", "msgfmt", "xgettext")


class FakeGettext:
    """Callable recording gettext commands and emulating their outputs."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._failures: list[tuple[str, str | None, int, str]] = []

    def fail(
        self,
        tool: str,
        match: str | None = None,
        returncode: int = 1,
        stderr: str = "fatal error",
    ) -> None:
        """Make ``tool`` fail, optionally only when an argument contains ``match``."""
        self._failures.append((tool, match, returncode, stderr))

    def calls_for(self, tool: str) -> list[list[str]]:
        """Recorded commands of one tool."""
        return [call for call in self.calls if Path(call[0]).name == tool]

    def __call__(
        self, args: Sequence[str], **kwargs: object
    ) -> subprocess.CompletedProcess[str]:
        command = [str(arg) for arg in args]
        self.calls.append(command)
        tool = Path(command[0]).name

        for failing_tool, match, returncode, stderr in self._failures:
            if failing_tool == tool and (
                match is None or any(match in arg for arg in command[1:])
            ):
                return subprocess.CompletedProcess(command, returncode, "", stderr)

        for arg in command[1:]:
            for prefix in ("--output=", "--output-file="):
                if arg.startswith(prefix):
                    output = Path(arg.removeprefix(prefix))
                    _ = output.write_text(f"# written by {tool}\n", encoding="utf-8")

        return subprocess.CompletedProcess(command, 0, "", "")


@pytest.fixture
def fake_gettext(monkeypatch: pytest.MonkeyPatch) -> FakeGettext:
    """Patch subprocess.run with a FakeGettext instance."""
    fake = FakeGettext()
    monkeypatch.setattr("locale_updater.tools.runner.subprocess.run", fake)
    return fake


@pytest.fixture
def tool_set() -> ToolSet:
    """Tool set pointing at a fixed fake prefix."""
    bin_dir = Path("/opt/gettext/bin")
    return ToolSet(*(bin_dir / name for name in TOOL_NAMES))


@pytest.fixture
def fake_bin_dir(tmp_path: Path) -> Path:
    """Directory holding four executable placeholders for the gettext tools."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    for name in TOOL_NAMES:
        executable = bin_dir / name
        _ = executable.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        executable.chmod(0o755)
    return bin_dir


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project directory containing the module ``my-module``."""
    project = tmp_path / "src"
    (project / "my-module" / "my_module").mkdir(parents=True)
    return project


@pytest.fixture
def layout(project_dir: Path) -> CatalogLayout:
    """Layout of ``my-module`` with its locale directory and template in place."""
    module_layout = CatalogLayout.from_module(project_dir, "my-module")
    module_layout.locale_path.mkdir()
    module_layout.template_path.touch()
    return module_layout


def add_catalog(layout: CatalogLayout, language: str, name: str | None = None) -> Path:
    """Create a catalog file for ``language`` and return its path."""
    catalog_dir = layout.catalog_dir(language)
    catalog_dir.mkdir(parents=True, exist_ok=True)
    po_file = catalog_dir / f"{name or layout.catalog_name}.po"
    _ = po_file.write_text(
        f'msgid ""\nmsgstr ""\n"Language: {language}\\n"\n', encoding="utf-8"
    )
    return po_file


@pytest.fixture
def make_catalog():
    """Factory fixture wrapping ``add_catalog``."""
    return add_catalog
