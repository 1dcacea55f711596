"""
Extraction, merge and compilation of a module's catalogs.

The three stages run in order. Failed tool invocations are collected per
stage and reported at the end, unless fail-fast is configured, in which case
the first failure aborts the pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing_extensions import override

from ..config.schema import PipelineConfig
from ..tools.resolver import ToolSet
from ..tools.runner import ToolInvocation, ToolRunner
from ..utils.core.exceptions import ToolExecutionError
from .layout import CatalogLayout, compiled_path

logger = logging.getLogger(__name__)


class StageResult:
    """Result of one pipeline stage."""

    def __init__(self, name: str) -> None:
        self.name: str = name
        self.processed_files: list[Path] = []
        self.produced_files: list[Path] = []
        self.failed_files: list[tuple[Path, ToolExecutionError]] = []
        self.failed_invocations: int = 0

    @property
    def success_count(self) -> int:
        """Number of files processed without error."""
        return len(self.processed_files)

    @property
    def failure_count(self) -> int:
        """Number of files whose tool invocation failed."""
        return len(self.failed_files)

    @property
    def ok(self) -> bool:
        return not self.failed_files

    def record(self, files: Sequence[Path], invocation: ToolInvocation, output: Path) -> None:
        """Record the outcome of one invocation covering ``files``."""
        if invocation.succeeded:
            self.processed_files.extend(files)
            if output not in self.produced_files:
                self.produced_files.append(output)
        else:
            self.failed_invocations += 1
            error = invocation.to_error()
            self.failed_files.extend((path, error) for path in files)

    @override
    def __str__(self) -> str:
        return f"{self.name}: {self.success_count} ok, {self.failure_count} failed"


class PipelineResult:
    """Aggregated result of the extract/merge/compile stages."""

    def __init__(self) -> None:
        self.stages: list[StageResult] = []
        self.aborted: bool = False

    @property
    def ok(self) -> bool:
        return not self.aborted and all(stage.ok for stage in self.stages)

    @property
    def failures(self) -> list[tuple[str, Path, ToolExecutionError]]:
        """Every failure as (stage name, file, error)."""
        return [
            (stage.name, path, error)
            for stage in self.stages
            for path, error in stage.failed_files
        ]

    @property
    def failed_invocation_count(self) -> int:
        """Number of tool invocations that failed, across all stages."""
        return sum(stage.failed_invocations for stage in self.stages)

    def stage(self, name: str) -> StageResult:
        """
        Look up a stage result by name.

        Raises:
            KeyError: If the stage did not run
        """
        for stage in self.stages:
            if stage.name == name:
                return stage
        raise KeyError(name)

    @override
    def __str__(self) -> str:
        summary = "; ".join(str(stage) for stage in self.stages) or "no stages run"
        if self.aborted:
            summary += " (aborted)"
        return f"Pipeline results: {summary}"


class PipelineAborted(Exception):
    """Raised inside the pipeline to stop after a fail-fast failure."""

    def __init__(self, stage: StageResult) -> None:
        super().__init__(stage.name)
        self.stage: StageResult = stage


def _check(
    stage: StageResult, invocation: ToolInvocation, settings: PipelineConfig
) -> None:
    if not invocation.succeeded and settings.fail_fast:
        raise PipelineAborted(stage)


def extract_template(
    layout: CatalogLayout,
    tools: ToolSet,
    runner: ToolRunner,
    settings: PipelineConfig,
) -> StageResult:
    """
    Regenerate the template from the domain's catalogs with xgettext.

    In ``combined`` mode all catalogs feed a single xgettext call so the
    template holds the union of their messages. In ``per-catalog`` mode the
    template is rewritten once per catalog and the last one wins.
    """
    result = StageResult("extract")
    catalogs = layout.domain_catalogs()
    logger.info(f"Extracting template {layout.template_path.name} from {len(catalogs)} catalog(s)")

    if catalogs:
        base = [
            tools.xgettext,
            "--language=PO",
            "--force-po",
            f"--output={layout.template_path}",
        ]
        if settings.extraction_mode == "combined":
            invocation = runner.run([*base, *catalogs])
            result.record(catalogs, invocation, layout.template_path)
            _check(result, invocation, settings)
        else:
            for po_file in catalogs:
                invocation = runner.run([*base, po_file])
                result.record([po_file], invocation, layout.template_path)
                _check(result, invocation, settings)

    logger.info(f"Extraction finished: {result}")
    return result


def merge_catalogs(
    layout: CatalogLayout,
    tools: ToolSet,
    runner: ToolRunner,
    settings: PipelineConfig,
) -> StageResult:
    """Update every catalog of the domain in place against the template."""
    result = StageResult("merge")
    catalogs = layout.domain_catalogs()
    logger.info(f"Merging {layout.template_path.name} into {len(catalogs)} catalog(s)")

    for po_file in catalogs:
        invocation = runner.run(
            [
                tools.msgmerge,
                "--update",
                "--backup=none",
                *settings.merge_options,
                po_file,
                layout.template_path,
            ]
        )
        result.record([po_file], invocation, po_file)
        _check(result, invocation, settings)

    logger.info(f"Merge finished: {result}")
    return result


def compile_catalogs(
    layout: CatalogLayout,
    tools: ToolSet,
    runner: ToolRunner,
    settings: PipelineConfig,
) -> StageResult:
    """Compile every catalog under the locale path, all domains included."""
    result = StageResult("compile")
    catalogs = layout.all_catalogs()
    logger.info(f"Compiling {len(catalogs)} catalog(s)")

    for po_file in catalogs:
        mo_file = compiled_path(po_file)
        invocation = runner.run([tools.msgfmt, f"--output-file={mo_file}", po_file])
        result.record([po_file], invocation, mo_file)
        _check(result, invocation, settings)

    logger.info(f"Compilation finished: {result}")
    return result


Stage = Callable[[CatalogLayout, ToolSet, ToolRunner, PipelineConfig], StageResult]

STAGES: tuple[Stage, ...] = (extract_template, merge_catalogs, compile_catalogs)


def run_pipeline(
    layout: CatalogLayout,
    tools: ToolSet,
    runner: ToolRunner,
    settings: PipelineConfig,
) -> PipelineResult:
    """
    Run the extract, merge and compile stages in order.

    Args:
        layout: Catalog layout of the module
        tools: Resolved gettext tools
        runner: Runner executing the tools
        settings: Extraction mode, fail-fast and merge options

    Returns:
        PipelineResult with one StageResult per stage that ran
    """
    result = PipelineResult()

    for stage in STAGES:
        try:
            result.stages.append(stage(layout, tools, runner, settings))
        except PipelineAborted as e:
            result.stages.append(e.stage)
            logger.error(f"Stopping pipeline after failure in {e.stage.name} stage")
            result.aborted = True
            break

    logger.info(str(result))

    if result.failures:
        logger.error("Failed files:")
        for stage_name, path, error in result.failures:
            logger.error(f"  [{stage_name}] {path}: {error}")

    return result
