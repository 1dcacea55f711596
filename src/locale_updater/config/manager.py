"""Configuration manager for locale-updater.

This module loads the optional YAML settings file, validates it against the
Pydantic schema and applies command-line overrides.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.core.exceptions import ConfigurationError
from .schema import LocaleUpdaterConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Load and validate locale-updater settings."""

    @staticmethod
    def load_config(config_path: Path | None) -> LocaleUpdaterConfig:
        """
        Load and validate configuration from a YAML file.

        Args:
            config_path: Path to the YAML file, or None for built-in defaults

        Returns:
            LocaleUpdaterConfig: Validated configuration object

        Raises:
            ConfigurationError: If the file is missing, not valid YAML, or
                fails schema validation
        """
        if config_path is None:
            return LocaleUpdaterConfig()

        if not config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}", context=config_path
            )

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML syntax in {config_path}: {e}", context=config_path
            ) from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data
        else:
            raise ConfigurationError(
                "Configuration file must contain a YAML dictionary, "
                + f"got {type(raw_config_data).__name__}",
                context=config_path,
            )

        try:
            config = LocaleUpdaterConfig.model_validate(config_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {config_path}: {e}", context=config_path
            ) from e

        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def apply_overrides(
        config: LocaleUpdaterConfig,
        fail_fast: bool = False,
        verbose: bool = False,
    ) -> LocaleUpdaterConfig:
        """
        Return a copy of the configuration with command-line flags applied.

        Flags only ever switch behaviour on; an unset flag keeps the file value.
        """
        pipeline = config.pipeline
        logging_config = config.logging

        if fail_fast:
            pipeline = pipeline.model_copy(update={"fail_fast": True})
        if verbose:
            logging_config = logging_config.model_copy(update={"level": "DEBUG"})

        return config.model_copy(
            update={"pipeline": pipeline, "logging": logging_config}
        )

    @staticmethod
    def create_sample_config(sample_path: Path) -> None:
        """
        Write a documented sample configuration file.

        Args:
            sample_path: Path where to create the sample configuration file
        """
        _ = sample_path.parent.mkdir(parents=True, exist_ok=True)
        _ = sample_path.write_text(SAMPLE_CONFIG, encoding="utf-8")


SAMPLE_CONFIG = """# locale-updater configuration file
# Every key is optional; omitted keys keep their default value.

tools:
  # Executable names looked up on PATH (or in the Homebrew prefix on macOS)
  msginit: msginit
  msgmerge: msgmerge
  msgfmt: msgfmt
  xgettext: xgettext
  # Homebrew formula providing the gettext tools
  homebrew_formula: gettext

pipeline:
  # 'combined' builds the template from all catalogs at once,
  # 'per-catalog' rebuilds it once per catalog (last catalog wins)
  extraction_mode: combined
  # Stop at the first failing tool instead of reporting all failures at the end
  fail_fast: false
  # Extra options passed to msgmerge
  merge_options:
    - --no-location
    - --no-fuzzy-matching

logging:
  # DEBUG, INFO, WARNING or ERROR
  level: INFO
  # Optional rotating log file
  log_file: null
"""
