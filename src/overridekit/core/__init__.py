"""Core module exports."""

from overridekit.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    OverrideKitError,
    ParseError,
    TweakError,
)
from overridekit.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "OverrideKitError",
    "ParseError",
    "TweakError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
