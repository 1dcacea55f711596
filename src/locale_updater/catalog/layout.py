"""
Filesystem layout of a module's translation catalogs.

A module ``my-module`` under ``./src`` is laid out as::

    src/my-module/my_module/locale/my_module.pot
    src/my-module/my_module/locale/<lang>/LC_MESSAGES/my_module.po
    src/my-module/my_module/locale/<lang>/LC_MESSAGES/my_module.mo
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ..utils.core.exceptions import LayoutError, UsageError

logger = logging.getLogger(__name__)

LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2}(_[A-Z]{2})?$")
LANGUAGE_CODE_HINT = (
    "Language code must be two lowercase letters, optionally followed by an "
    + "underscore and two uppercase country letters (e.g. 'fr' or 'en_GB')"
)

LOCALE_DIR_NAME = "locale"
MESSAGES_DIR_NAME = "LC_MESSAGES"
TEMPLATE_SUFFIX = ".pot"
CATALOG_SUFFIX = ".po"
COMPILED_SUFFIX = ".mo"


def is_valid_language_code(code: str) -> bool:
    """Check a language code against the ``ll`` / ``ll_CC`` format."""
    return LANGUAGE_CODE_PATTERN.fullmatch(code) is not None


def validate_language_code(code: str | None) -> str | None:
    """
    Validate an optional language code.

    Args:
        code: Language code from the command line, or None/empty for none

    Returns:
        The code, or None when no language was given

    Raises:
        UsageError: If a non-empty code does not match the expected format
    """
    if not code:
        return None
    if not is_valid_language_code(code):
        raise UsageError(f"Invalid language code '{code}'. {LANGUAGE_CODE_HINT}", code)
    return code


def module_to_domain(module: str) -> str:
    """Hyphens in a module name become underscores in its domain."""
    return module.replace("-", "_")


def domain_to_catalog_name(domain: str) -> str:
    """File stem shared by the template and the catalogs of a domain."""
    return domain.replace(".", "_")


class CatalogLayout(BaseModel):
    """Immutable set of paths derived from a project directory and a module name."""

    model_config = ConfigDict(frozen=True)

    module: str
    domain: str
    catalog_name: str
    project_dir: Path
    module_dir: Path
    search_path: Path
    locale_path: Path
    template_path: Path

    @classmethod
    def from_module(cls, project_dir: Path, module: str) -> CatalogLayout:
        """
        Derive every path of the layout.

        Args:
            project_dir: Directory holding the modules
            module: Module name, e.g. ``my-module`` or ``app.i18n``

        Returns:
            The derived layout; nothing is checked or created on disk
        """
        domain = module_to_domain(module)
        catalog_name = domain_to_catalog_name(domain)
        module_dir = project_dir / module
        search_path = module_dir.joinpath(*domain.split("."))
        locale_path = search_path / LOCALE_DIR_NAME

        return cls(
            module=module,
            domain=domain,
            catalog_name=catalog_name,
            project_dir=project_dir,
            module_dir=module_dir,
            search_path=search_path,
            locale_path=locale_path,
            template_path=locale_path / f"{catalog_name}{TEMPLATE_SUFFIX}",
        )

    def catalog_dir(self, language: str) -> Path:
        """Directory holding the catalogs of one language."""
        return self.locale_path / language / MESSAGES_DIR_NAME

    def catalog_file(self, language: str) -> Path:
        """Catalog of this domain for one language."""
        return self.catalog_dir(language) / f"{self.catalog_name}{CATALOG_SUFFIX}"

    def domain_catalogs(self) -> list[Path]:
        """Existing catalogs of this domain, one per language, sorted."""
        pattern = f"*/{MESSAGES_DIR_NAME}/{self.catalog_name}{CATALOG_SUFFIX}"
        return sorted(self.locale_path.glob(pattern))

    def all_catalogs(self) -> list[Path]:
        """Existing catalogs of every domain under the locale path, sorted."""
        return sorted(self.locale_path.glob(f"*/{MESSAGES_DIR_NAME}/*{CATALOG_SUFFIX}"))


def compiled_path(po_file: Path) -> Path:
    """Binary catalog path for a catalog file."""
    return po_file.with_suffix(COMPILED_SUFFIX)


def ensure_layout(layout: CatalogLayout, dry_run: bool = False) -> None:
    """
    Check the module directories and create the locale directory and template.

    Args:
        layout: Layout to validate
        dry_run: Log what would be created without touching the filesystem

    Raises:
        LayoutError: If the module directory or the search path is missing
    """
    if not layout.module_dir.is_dir():
        raise LayoutError(
            f"Module directory does not exist: {layout.module_dir}", layout.module_dir
        )

    if not layout.search_path.is_dir():
        raise LayoutError(
            f"Search path does not exist: {layout.search_path}", layout.search_path
        )

    if not layout.locale_path.is_dir():
        if dry_run:
            logger.info(f"DRY RUN: Would create {layout.locale_path}")
        else:
            layout.locale_path.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created locale directory {layout.locale_path}")

    if not layout.template_path.exists():
        if dry_run:
            logger.info(f"DRY RUN: Would create {layout.template_path}")
        else:
            layout.template_path.touch()
            logger.info(f"Created empty template {layout.template_path}")
