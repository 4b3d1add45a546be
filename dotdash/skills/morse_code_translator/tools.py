"""Morse code translator skill: encode, decode and validate Morse code."""

from typing import Any, Dict

from dotdash.core.codec import (
    get_supported_characters,
    morse_to_text,
    text_to_morse,
    translate,
    validate_morse_code,
    validate_text,
)
from dotdash.core.utils.tool_helpers import tool_error, tool_response, tool_wrapper

ACTIONS = ("encode", "decode", "translate", "validate", "characters")


@tool_wrapper(required_params=["action"], optional_params=["text", "morse", "direction"])
def morse_tool(params: Dict[str, Any]) -> Dict[str, Any]:
    """Encode text to Morse code, decode Morse to text, or validate either."""
    action = params["action"]

    if action == "encode":
        text = params.get("text")
        if not text:
            return tool_error("text required", code="MISSING_INPUT")
        return tool_response(text=text, morse=text_to_morse(text))

    if action == "decode":
        morse = params.get("morse")
        if not morse:
            return tool_error("morse required", code="MISSING_INPUT")
        return tool_response(morse=morse, text=morse_to_text(morse))

    if action == "translate":
        return tool_response(translate(params).to_dict())

    if action == "validate":
        if params.get("morse"):
            return tool_response(morse=params["morse"], is_valid=validate_morse_code(params["morse"]))
        if params.get("text"):
            return tool_response(text=params["text"], is_valid=validate_text(params["text"]))
        return tool_error("morse or text required", code="MISSING_INPUT")

    if action == "characters":
        characters = get_supported_characters()
        return tool_response(characters=characters, count=len(characters))

    return tool_error(
        f"Unknown action: {action}. Use: {', '.join(ACTIONS)}",
        code="UNKNOWN_ACTION",
    )


__all__ = ["morse_tool", "ACTIONS"]
