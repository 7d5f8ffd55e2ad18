"""overridekit error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 4xxx: Refactor
- 5xxx: Parse
- 9xxx: Internal

Conditions that only make a tweak unavailable (no abstract base, nothing left
to override, unresolved base references) are never errors. These types cover
configuration problems, caller contract violations and parser setup failures.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Refactor (4xxx)
    REFACTOR_NOT_APPLICABLE = 4001
    REFACTOR_UNKNOWN_TWEAK = 4002
    REFACTOR_DUPLICATE_TWEAK = 4003
    REFACTOR_STALE_SOURCE = 4004

    # Parse (5xxx)
    PARSE_UNSUPPORTED_LANGUAGE = 5001
    PARSE_GRAMMAR_UNAVAILABLE = 5002
    PARSE_UNREADABLE_SOURCE = 5003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class OverrideKitError(Exception):
    """Base error with structured context for host integrations."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(OverrideKitError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class TweakError(OverrideKitError):
    """Caller misuse of a tweak or of the tweak registry."""

    @classmethod
    def not_applicable(cls, tweak_id: str, reason: str) -> "TweakError":
        return cls(
            code=ErrorCode.REFACTOR_NOT_APPLICABLE,
            message=f"Tweak '{tweak_id}' cannot be applied: {reason}",
            details={"tweak": tweak_id, "reason": reason},
        )

    @classmethod
    def unknown_tweak(cls, tweak_id: str) -> "TweakError":
        return cls(
            code=ErrorCode.REFACTOR_UNKNOWN_TWEAK,
            message=f"No tweak registered under '{tweak_id}'",
            details={"tweak": tweak_id},
        )

    @classmethod
    def duplicate_tweak(cls, tweak_id: str) -> "TweakError":
        return cls(
            code=ErrorCode.REFACTOR_DUPLICATE_TWEAK,
            message=f"A tweak is already registered under '{tweak_id}'",
            details={"tweak": tweak_id},
        )

    @classmethod
    def stale_source(cls, path: str) -> "TweakError":
        return cls(
            code=ErrorCode.REFACTOR_STALE_SOURCE,
            message=f"Source of {path} changed since the edit was computed",
            retryable=True,
            details={"path": path},
        )


class ParseError(OverrideKitError):
    """Source parsing setup errors."""

    @classmethod
    def unsupported_language(cls, path: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNSUPPORTED_LANGUAGE,
            message=f"Not a C++ source file: {path}",
            details={"path": path},
        )

    @classmethod
    def grammar_unavailable(cls, module: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_GRAMMAR_UNAVAILABLE,
            message=f"Tree-sitter grammar '{module}' is not available: {reason}",
            details={"module": module, "reason": reason},
        )

    @classmethod
    def unreadable_source(cls, path: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNREADABLE_SOURCE,
            message=f"Cannot read {path} as UTF-8 text: {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(OverrideKitError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
