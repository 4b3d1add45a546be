"""
Tests for the morse_code_translator skill
"""

import pytest

from dotdash.skills.morse_code_translator import ACTIONS, morse_tool


@pytest.mark.unit
class TestMorseTool:
    """Tests for morse_tool actions."""

    def test_encode(self):
        """encode returns the text and its Morse form."""
        result = morse_tool({"action": "encode", "text": "sos"})
        assert result == {"success": True, "text": "sos", "morse": "... --- ..."}

    def test_decode(self):
        """decode returns uppercase text."""
        result = morse_tool({"action": "decode", "morse": ".... ."})
        assert result["success"] is True
        assert result["text"] == "HE"

    def test_translate(self):
        """translate returns the serialized TranslationResult."""
        result = morse_tool({"action": "translate", "direction": "morse-to-text", "morse": "-"})
        assert result["success"] is True
        assert result["translated"] == "T"
        assert result["direction"] == "morse-to-text"

    def test_validate_morse_and_text(self):
        """validate checks morse first, then text."""
        assert morse_tool({"action": "validate", "morse": "...... ......"})["is_valid"] is True
        assert morse_tool({"action": "validate", "text": "HELLO€"})["is_valid"] is False

    def test_characters(self):
        """characters lists the supported set with its count."""
        result = morse_tool({"action": "characters"})
        assert result["count"] == len(result["characters"]) == 54

    def test_action_alias(self):
        """'operation' is accepted as an alias for 'action'."""
        assert morse_tool({"operation": "encode", "text": "E"})["morse"] == "."

    def test_payload_aliases(self):
        """Payload params accept their aliases as well."""
        assert morse_tool({"action": "encode", "message": "E"})["morse"] == "."
        assert morse_tool({"action": "decode", "morse_code": "-"})["text"] == "T"
        result = morse_tool({"action": "translate", "mode": "morse-to-text", "morse": "."})
        assert result["translated"] == "E"

    @pytest.mark.parametrize("params,code", [
        ({}, "MISSING_PARAM"),
        ({"action": "encode"}, "MISSING_INPUT"),
        ({"action": "decode"}, "MISSING_INPUT"),
        ({"action": "validate"}, "MISSING_INPUT"),
        ({"action": "fly"}, "UNKNOWN_ACTION"),
        ({"action": "encode", "text": "€"}, "UNSUPPORTED_CHARACTER"),
        ({"action": "decode", "morse": "......"}, "INVALID_MORSE_CODE"),
        ({"action": "translate", "direction": "up"}, "INVALID_DIRECTION"),
    ])
    def test_failures_never_raise(self, params, code):
        """Every failure comes back as an error dict with a code."""
        result = morse_tool(params)
        assert result["success"] is False
        assert result["code"] == code

    def test_unknown_action_lists_actions(self):
        """The unknown-action error names the supported actions."""
        error = morse_tool({"action": "fly"})["error"]
        for action in ACTIONS:
            assert action in error
