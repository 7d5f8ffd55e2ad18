"""Tests for error types and codes."""

import pytest

from overridekit.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    OverrideKitError,
    ParseError,
    TweakError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.REFACTOR_NOT_APPLICABLE, 4000),
            (ErrorCode.REFACTOR_STALE_SOURCE, 4000),
            (ErrorCode.PARSE_GRAMMAR_UNAVAILABLE, 5000),
            (ErrorCode.PARSE_UNREADABLE_SOURCE, 5000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestOverrideKitError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = OverrideKitError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = OverrideKitError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        # When
        result = str(error)

        # Then
        assert result == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(OverrideKitError) as exc_info:
            raise TweakError.unknown_tweak("nope")

        assert exc_info.value.code is ErrorCode.REFACTOR_UNKNOWN_TWEAK


class TestConfigError:
    """ConfigError factory method tests."""

    def test_parse_error_includes_path_and_reason(self) -> None:
        error = ConfigError.parse_error("/tmp/config.yaml", "bad indent")

        assert error.code is ErrorCode.CONFIG_PARSE_ERROR
        assert "/tmp/config.yaml" in error.message
        assert error.details == {"path": "/tmp/config.yaml", "reason": "bad indent"}

    def test_invalid_value_stringifies_value(self) -> None:
        error = ConfigError.invalid_value("collector.max_depth", 0, "must be >= 1")

        assert error.code is ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["value"] == "0"
        assert "collector.max_depth" in error.message


class TestTweakError:
    """TweakError factory method tests."""

    def test_not_applicable_names_tweak_and_reason(self) -> None:
        error = TweakError.not_applicable("override-pure-virtuals", "no class at offset 3")

        assert error.code is ErrorCode.REFACTOR_NOT_APPLICABLE
        assert error.details == {"tweak": "override-pure-virtuals", "reason": "no class at offset 3"}
        assert not error.retryable

    def test_duplicate_tweak(self) -> None:
        error = TweakError.duplicate_tweak("x")

        assert error.code is ErrorCode.REFACTOR_DUPLICATE_TWEAK

    def test_stale_source_is_retryable(self) -> None:
        error = TweakError.stale_source("a.hpp")

        assert error.code is ErrorCode.REFACTOR_STALE_SOURCE
        assert error.retryable


class TestParseError:
    def test_unsupported_language(self) -> None:
        error = ParseError.unsupported_language("main.py")

        assert error.code is ErrorCode.PARSE_UNSUPPORTED_LANGUAGE
        assert "main.py" in str(error)

    def test_grammar_unavailable(self) -> None:
        error = ParseError.grammar_unavailable("tree_sitter_cpp", "No module named 'tree_sitter_cpp'")

        assert error.details["module"] == "tree_sitter_cpp"

    def test_unreadable_source(self) -> None:
        error = ParseError.unreadable_source("latin1.hpp", "invalid start byte")

        assert error.code is ErrorCode.PARSE_UNREADABLE_SOURCE
        assert error.details == {"path": "latin1.hpp", "reason": "invalid start byte"}


class TestInternalError:
    def test_unexpected_keeps_details(self) -> None:
        error = InternalError.unexpected("boom", where="emit")

        assert error.code is ErrorCode.INTERNAL_ERROR
        assert error.details == {"where": "emit"}
