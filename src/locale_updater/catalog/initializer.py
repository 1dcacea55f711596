"""
Creation of a new per-language catalog from the module template.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..tools.resolver import ToolSet
from ..tools.runner import ToolRunner
from ..utils.core.exceptions import LanguageExistsError
from .layout import CatalogLayout

logger = logging.getLogger(__name__)


def initialize_language(
    layout: CatalogLayout,
    language: str,
    tools: ToolSet,
    runner: ToolRunner,
) -> Path:
    """
    Seed the catalog of a new language with msginit.

    Args:
        layout: Catalog layout of the module
        language: Validated language code
        tools: Resolved gettext tools
        runner: Runner executing msginit

    Returns:
        Path of the new catalog file

    Raises:
        LanguageExistsError: If the language directory already exists
        ToolExecutionError: If msginit fails
    """
    catalog_dir = layout.catalog_dir(language)
    po_file = layout.catalog_file(language)

    if catalog_dir.exists():
        raise LanguageExistsError(language, catalog_dir)

    logger.info(f"Initializing language {language} for {layout.domain}")

    if runner.dry_run:
        logger.info(f"DRY RUN: Would create {catalog_dir}")
    else:
        catalog_dir.mkdir(parents=True)

    _ = runner.run(
        [
            tools.msginit,
            "--no-translator",
            f"--input={layout.template_path}",
            f"--output-file={po_file}",
            f"--locale={language}",
        ],
        check=True,
    )

    logger.info(f"Created catalog {po_file}")
    return po_file
