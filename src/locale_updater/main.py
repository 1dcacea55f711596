"""
Main entry point for locale-updater.

This module sets up logging, loads the settings, resolves the gettext tools
and the module layout, then runs language initialization and the
extract/merge/compile pipeline.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from .catalog.initializer import initialize_language
from .catalog.layout import CatalogLayout, ensure_layout
from .catalog.pipeline import PipelineResult, run_pipeline
from .config.manager import ConfigManager
from .config.schema import LocaleUpdaterConfig, LoggingConfig
from .tools.resolver import select_resolver
from .tools.runner import ToolRunner
from .utils.cli.args import ParsedArgs, parse_arguments
from .utils.core.exceptions import LanguageExistsError, LocaleUpdaterError

logger = logging.getLogger(__name__)

LOGGER_NAME = "locale_updater"


def setup_logging(logging_config: LoggingConfig) -> None:
    """
    Configure the package logger.

    Console messages go to stderr. When a log file is configured, a rotating
    file handler with a detailed format is added.

    Args:
        logging_config: Level and optional log file
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    # The file handler records debug output regardless of the console level
    package_logger.setLevel(
        logging.DEBUG if logging_config.log_file else logging_config.level
    )

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    simple_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging_config.level)
    console_handler.setFormatter(simple_formatter)
    package_logger.addHandler(console_handler)

    if logging_config.log_file:
        log_path = Path(logging_config.log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        package_logger.addHandler(file_handler)


def load_settings(args: ParsedArgs) -> LocaleUpdaterConfig:
    """Load the settings file and apply command-line overrides."""
    config = ConfigManager.load_config(args.config_file)
    return ConfigManager.apply_overrides(
        config, fail_fast=args.fail_fast, verbose=args.verbose
    )


def write_sample_config(sample_path: Path) -> int:
    """Write the documented sample settings file and return the exit code."""
    setup_logging(LoggingConfig())
    if sample_path.exists():
        logger.error(f"Refusing to overwrite existing file: {sample_path}")
        return 1

    try:
        ConfigManager.create_sample_config(sample_path)
    except OSError as e:
        logger.error(f"Could not write sample configuration: {e}")
        return 1

    logger.info(f"Sample configuration written to {sample_path}")
    return 0


def update_catalogs(
    args: ParsedArgs, settings: LocaleUpdaterConfig
) -> PipelineResult:
    """
    Run one full update for the module named in ``args``.

    Tools are resolved and an existing language is rejected before anything
    on disk is created or changed.

    Raises:
        LocaleUpdaterError: On any fatal environment, state or tool error
    """
    layout = CatalogLayout.from_module(args.project_dir, args.module)
    logger.info(
        f"Project {args.project}: module {layout.module} (domain {layout.domain})"
    )
    logger.debug(f"Locale path: {layout.locale_path}")

    resolver = select_resolver(settings.tools)
    tools = resolver.resolve_all()

    if args.language and layout.catalog_dir(args.language).exists():
        raise LanguageExistsError(args.language, layout.catalog_dir(args.language))

    ensure_layout(layout, dry_run=args.dry_run)

    runner = ToolRunner(dry_run=args.dry_run)

    if args.language:
        _ = initialize_language(layout, args.language, tools, runner)

    return run_pipeline(layout, tools, runner, settings.pipeline)


def run(args: ParsedArgs) -> int:
    """
    Execute locale-updater for already parsed arguments.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args.sample_config is not None:
        return write_sample_config(args.sample_config)

    try:
        settings = load_settings(args)
    except LocaleUpdaterError as e:
        setup_logging(LoggingConfig(level="DEBUG" if args.verbose else "INFO"))
        logger.error(str(e))
        return 1

    setup_logging(settings.logging)

    try:
        result = update_catalogs(args, settings)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1
    except LocaleUpdaterError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Filesystem error: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        return 1

    if not result.ok:
        logger.error(f"{result.failed_invocation_count} gettext command(s) failed")
        return 1

    logger.info("Catalogs are up to date")
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Parse the command line and run locale-updater.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    return run(parse_arguments(argv))
