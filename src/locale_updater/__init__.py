"""
locale-updater - create, merge and compile the gettext catalogs of a module.
"""

import sys

from .main import main as run_main


def main() -> None:
    """Console script entry point."""
    sys.exit(run_main())


__all__ = ["main"]
