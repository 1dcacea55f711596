"""
Catalog layout, language initialization and the extract/merge/compile pipeline.
"""

from .initializer import initialize_language
from .layout import (
    CatalogLayout,
    ensure_layout,
    is_valid_language_code,
    validate_language_code,
)
from .pipeline import PipelineResult, StageResult, run_pipeline

__all__ = [
    "initialize_language",
    "CatalogLayout",
    "ensure_layout",
    "is_valid_language_code",
    "validate_language_code",
    "PipelineResult",
    "StageResult",
    "run_pipeline",
]
