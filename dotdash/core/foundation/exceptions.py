"""
Dotdash Exceptions
==================

Typed failures raised by the Morse codec and the translation dispatcher.

Every error carries a machine-readable ``code`` and the HTTP ``status_code``
the web layer should answer with, so callers can map failures without
inspecting message text.

Hierarchy:
    DotdashError
    └── MorseError
        ├── InvalidInputError
        ├── UnsupportedCharacterError
        ├── InvalidMorseCodeError
        └── TranslationRequestError
            ├── MissingInputError
            ├── UnsupportedCharactersError
            ├── InvalidFormatError
            └── InvalidDirectionError
"""

from typing import Any, Dict, Optional


class DotdashError(Exception):
    """Base class for all dotdash errors."""

    code: str = "DOTDASH_ERROR"
    status_code: int = 500

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.code}


class MorseError(DotdashError):
    """Failure inside the Morse codec. Always the caller's input."""

    code = "MORSE_ERROR"
    status_code = 400


class InvalidInputError(MorseError):
    """Empty, missing or non-string input where a string was required."""

    code = "INVALID_INPUT"


class UnsupportedCharacterError(MorseError):
    """Text contains a character with no Morse pattern."""

    code = "UNSUPPORTED_CHARACTER"

    def __init__(self, character: str):
        super().__init__(f"Unsupported character: {character}")
        self.character = character

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["character"] = self.character
        return result


class InvalidMorseCodeError(MorseError):
    """Morse input contains a token that decodes to nothing."""

    code = "INVALID_MORSE_CODE"

    def __init__(self, token: str):
        super().__init__(f"Invalid morse code: {token}")
        self.token = token

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["token"] = self.token
        return result


class TranslationRequestError(MorseError):
    """A translate() request was rejected before reaching the codec."""

    code = "TRANSLATION_REQUEST_ERROR"


class MissingInputError(TranslationRequestError):
    code = "MISSING_INPUT"


class UnsupportedCharactersError(TranslationRequestError):
    code = "UNSUPPORTED_CHARACTERS"


class InvalidFormatError(TranslationRequestError):
    code = "INVALID_FORMAT"


class InvalidDirectionError(TranslationRequestError):
    code = "INVALID_DIRECTION"
