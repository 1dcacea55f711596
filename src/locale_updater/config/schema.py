"""Configuration schema for locale-updater using nested Pydantic models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolsConfig(BaseModel):
    """Names of the external gettext executables."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    msginit: str = Field(default="msginit", min_length=1)
    msgmerge: str = Field(default="msgmerge", min_length=1)
    msgfmt: str = Field(default="msgfmt", min_length=1)
    xgettext: str = Field(default="xgettext", min_length=1)
    homebrew_formula: str = Field(
        default="gettext",
        description="Homebrew formula providing the tools on macOS",
        min_length=1,
    )

    @field_validator("msginit", "msgmerge", "msgfmt", "xgettext")
    @classmethod
    def validate_executable_name(cls, v: str) -> str:
        """Reject names with surrounding whitespace."""
        if v != v.strip():
            raise ValueError("Executable names must not contain surrounding whitespace")
        return v


class PipelineConfig(BaseModel):
    """Behaviour of the extract/merge/compile pipeline."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    extraction_mode: Literal["combined", "per-catalog"] = Field(
        default="combined",
        description=(
            "'combined' regenerates the template from all catalogs in one pass, "
            "'per-catalog' overwrites it once per catalog"
        ),
    )
    fail_fast: bool = Field(
        default=False,
        description="Stop at the first failing tool invocation",
    )
    merge_options: tuple[str, ...] = Field(
        default=("--no-location", "--no-fuzzy-matching"),
        description="Extra options passed to msgmerge",
    )

    @field_validator("merge_options")
    @classmethod
    def validate_merge_options(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Only options are accepted, never positional arguments."""
        for option in v:
            if not option.startswith("-"):
                raise ValueError(f"Merge option must start with '-': {option!r}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_file: str | None = Field(
        default=None,
        description="Optional path of a rotating log file",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class LocaleUpdaterConfig(BaseModel):
    """Top-level settings for one locale-updater run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
