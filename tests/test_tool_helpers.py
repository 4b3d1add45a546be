"""
Tests for tool_helpers
======================
tool_response, tool_error, require_params and the tool_wrapper decorator.
"""

import pytest

from dotdash.core.foundation.exceptions import InvalidInputError, UnsupportedCharacterError
from dotdash.core.utils.tool_helpers import (
    require_params,
    tool_error,
    tool_response,
    tool_wrapper,
)


@pytest.mark.unit
class TestToolResponse:
    """Tests for the response builders."""

    def test_success_merges_data_and_kwargs(self):
        """tool_response merges a dict and keyword fields."""
        assert tool_response({"a": 1}, b=2) == {"success": True, "a": 1, "b": 2}

    def test_error_with_code(self):
        """tool_error includes the code only when given."""
        assert tool_error("bad") == {"success": False, "error": "bad"}
        assert tool_error("bad", code="X", hint="h") == {
            "success": False, "error": "bad", "code": "X", "hint": "h",
        }


@pytest.mark.unit
class TestRequireParams:
    """Tests for require_params."""

    def test_all_present(self):
        """Present, truthy params pass."""
        assert require_params({"text": "a"}, ["text"]) is None

    def test_missing(self):
        """A missing or empty param produces MISSING_PARAM."""
        error = require_params({"text": ""}, ["text"])
        assert error["success"] is False
        assert error["code"] == "MISSING_PARAM"
        assert error["error"] == "text parameter is required"


@pytest.mark.unit
class TestToolWrapper:
    """Tests for the tool_wrapper decorator."""

    def test_passes_through_result(self):
        """The wrapped function's result is returned as-is."""
        @tool_wrapper(required_params=["text"])
        def echo(params):
            return tool_response(text=params["text"])

        assert echo({"text": "hi"}) == {"success": True, "text": "hi"}
        assert echo.required_params == ["text"]

    def test_resolves_aliases(self):
        """Aliases fill in missing required params."""
        @tool_wrapper(required_params=["text", "action"])
        def echo(params):
            return tool_response(text=params["text"], action=params["action"])

        result = echo({"message": "hi", "op": "encode"})
        assert result == {"success": True, "text": "hi", "action": "encode"}

    def test_resolves_optional_aliases_on_a_copy(self):
        """Optional params are resolved too, and the caller's dict is not changed."""
        @tool_wrapper(required_params=["action"], optional_params=["morse"])
        def echo(params):
            return tool_response(morse=params.get("morse"))

        params = {"action": "decode", "morse_code": "..."}
        assert echo(params)["morse"] == "..."
        assert params == {"action": "decode", "morse_code": "..."}

    def test_missing_required(self):
        """Missing required params short-circuit the call."""
        called = []

        @tool_wrapper(required_params=["morse"])
        def decode(params):
            called.append(True)
            return tool_response()

        result = decode({})
        assert result["code"] == "MISSING_PARAM"
        assert called == []

    def test_dotdash_error_becomes_tool_error(self):
        """Domain errors keep their message and code."""
        @tool_wrapper()
        def fails(params):
            raise InvalidInputError("Invalid text input")

        assert fails({}) == {"success": False, "error": "Invalid text input", "code": "INVALID_INPUT"}

    def test_error_details_are_kept(self):
        """Fields such as the offending character reach the error dict."""
        @tool_wrapper()
        def fails(params):
            raise UnsupportedCharacterError("€")

        assert fails({}) == {
            "success": False,
            "error": "Unsupported character: €",
            "code": "UNSUPPORTED_CHARACTER",
            "character": "€",
        }

    def test_unexpected_error(self):
        """Other exceptions are reported with the tool name."""
        @tool_wrapper()
        def explodes(params):
            raise RuntimeError("kaboom")

        result = explodes({})
        assert result["success"] is False
        assert result["error"] == "Failed to execute explodes: kaboom"
