"""
Create or update the gettext catalogs of a module.

Locates <project-dir>/<module>/<domain-as-path>/locale, creates the locale
directory and an empty <domain>.pot template when missing, optionally seeds a
new <lang>/LC_MESSAGES/<domain>.po catalog with msginit, then:

  1. rebuilds the template from the existing catalogs (xgettext)
  2. merges the template into every catalog (msgmerge)
  3. compiles every catalog to its binary .mo form (msgfmt)

The domain is the module name with hyphens replaced by underscores; dots in
the domain become nested directories.
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

from ...catalog.layout import validate_language_code
from ..core.exceptions import UsageError
from ..core.version import get_version


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    project: str
    module: str
    language: str | None
    project_dir: Path
    config_file: Path | None
    fail_fast: bool
    dry_run: bool
    verbose: bool
    sample_config: Path | None = None


class Defaults:
    """Default option values."""

    PROJECT: str = "generic"
    PROJECT_DIR: Path = Path("./src")


def validate_folder_path(path_str: str, folder_name: str) -> Path:
    """
    Validate a folder path without resolving it.

    Args:
        path_str: String representation of the folder path
        folder_name: Name of the folder (for error messages)

    Returns:
        Path with a leading tilde expanded

    Raises:
        PathValidationError: If the path is invalid
    """
    if "\0" in path_str:
        raise PathValidationError(f"Invalid {folder_name} path: embedded null byte")

    try:
        path = Path(path_str).expanduser()
    except (OSError, RuntimeError, ValueError) as e:
        raise PathValidationError(f"Invalid {folder_name} path: {e}") from e

    if path.exists() and not path.is_dir():
        raise PathValidationError(
            f"{folder_name.capitalize()} path exists but is not a directory: {path}"
        )

    return path


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for locale-updater.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="locale-updater",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  locale-updater --module=my-module
    Update and compile the existing catalogs of src/my-module

  locale-updater --module=my-module --lang=fr
    Add a French catalog, then update and compile all catalogs

  locale-updater --module=app.i18n --project-dir=~/work/app/src --dry-run
    Show the commands that would run for src/app.i18n/app/i18n/locale

  locale-updater --create-sample-config=locale-updater.yml
    Write a documented settings file to start from
""",
    )

    _ = parser.add_argument(
        "--project",
        type=str,
        default=Defaults.PROJECT,
        help="Project name, informational only (default: %(default)s)",
        metavar="PROJECT_NAME",
    )

    _ = parser.add_argument(
        "--module",
        type=str,
        default="",
        help="Name of the module whose catalogs are maintained (required)",
        metavar="MODULE_NAME",
    )

    _ = parser.add_argument(
        "--lang",
        type=str,
        default="",
        help="Language code to initialize, e.g. 'fr' or 'en_GB'",
        metavar="LANGUAGE_CODE",
    )

    _ = parser.add_argument(
        "--project-dir",
        type=str,
        default=str(Defaults.PROJECT_DIR),
        help="Directory holding the modules (default: %(default)s)",
        metavar="DIR_PATH",
    )

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=None,
        help="Optional YAML settings file",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first failing gettext command",
    )

    _ = parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the commands without running them or changing any file",
    )

    _ = parser.add_argument(
        "--create-sample-config",
        type=str,
        default=None,
        help="Write a documented sample settings file to PATH and exit",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Without a module name the help text is printed and the process exits
    with status 1, as it does for an invalid language code. The module may
    be omitted when only a sample settings file is requested.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated values

    Raises:
        SystemExit: On usage errors or when --help/--version is requested
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    module: str = getattr(parsed, "module", "").strip()
    language: str = getattr(parsed, "lang", "")
    project_dir_str: str = getattr(parsed, "project_dir", "")
    config_file_str: str | None = getattr(parsed, "config_file", None)
    sample_config_str: str | None = getattr(parsed, "create_sample_config", None)

    if not module and not sample_config_str:
        parser.print_help(sys.stderr)
        sys.exit(1)

    try:
        language_code = validate_language_code(language)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        project_dir = validate_folder_path(project_dir_str, "project directory")
        config_file = (
            Path(config_file_str).expanduser() if config_file_str else None
        )
        sample_config = (
            Path(sample_config_str).expanduser() if sample_config_str else None
        )
    except PathValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return ParsedArgs(
        project=getattr(parsed, "project", Defaults.PROJECT),
        module=module,
        language=language_code,
        project_dir=project_dir,
        config_file=config_file,
        fail_fast=bool(getattr(parsed, "fail_fast", False)),
        dry_run=bool(getattr(parsed, "dry_run", False)),
        verbose=bool(getattr(parsed, "verbose", False)),
        sample_config=sample_config,
    )
