"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (OVERRIDEKIT__SECTION__KEY)
3. Project YAML (.overridekit/config.yaml)
4. Global YAML (~/.config/overridekit/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    OVERRIDEKIT__<SECTION>__<KEY>=<VALUE>

Examples:
    OVERRIDEKIT__LOGGING__LEVEL=DEBUG
    OVERRIDEKIT__EMITTER__BODY_STYLE=stub
    OVERRIDEKIT__COLLECTOR__MAX_DEPTH=32
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
BodyStyle = Literal["declaration", "stub"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        OVERRIDEKIT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every skipped base and chosen anchor.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class EmitterConfig(BaseModel):
    """Rendering of synthesized overrides.

    Env vars:
        OVERRIDEKIT__EMITTER__BODY_STYLE: "declaration" or "stub"
        OVERRIDEKIT__EMITTER__PLACEHOLDER_PREFIX: Name prefix for unnamed parameters
        OVERRIDEKIT__EMITTER__INDENT: Prefix for every emitted line
    """

    body_style: BodyStyle = Field(
        default="declaration",
        description="'declaration' emits 'override;'. 'stub' emits a body that "
        "fails to compile until the method is implemented.",
    )
    placeholder_prefix: str | None = Field(
        default=None,
        description="When set, unnamed parameters are rendered as <prefix>1, <prefix>2, ... "
        "When unset they stay unnamed.",
    )
    indent: str = Field(
        default="",
        description="Whitespace prepended to every emitted line.",
    )

    @field_validator("placeholder_prefix")
    @classmethod
    def validate_placeholder_prefix(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v.isidentifier():
            raise ValueError(f"Placeholder prefix must be a valid identifier: {v!r}")
        return v

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: str) -> str:
        if v.strip(" \t"):
            raise ValueError("Indent may only contain spaces and tabs")
        return v


class CollectorConfig(BaseModel):
    """Base-class graph traversal.

    Env vars:
        OVERRIDEKIT__COLLECTOR__MAX_DEPTH: Deepest base level visited
    """

    max_depth: int = Field(
        default=64,
        description="Bases deeper than this are skipped with a warning. "
        "Only malformed (cyclic) hierarchies come close.",
    )

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_depth must be >= 1, got {v}")
        return v


class OverrideKitConfig(BaseModel):
    """Root configuration for overridekit.

    All settings can be configured via:
    1. Environment variables: OVERRIDEKIT__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    emitter: EmitterConfig = Field(default_factory=EmitterConfig)
    collector: CollectorConfig = Field(default_factory=CollectorConfig)
