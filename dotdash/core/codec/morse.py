"""
Morse Codec
===========

Bidirectional translation between plain text and International Morse Code.

Text is encoded one character at a time; tokens are joined with a single
space and a word break is the ``/`` token. The codec is stateless: both
tables are built once at import and exposed read-only.

Usage:
    from dotdash.core.codec import text_to_morse, morse_to_text, translate

    text_to_morse("sos")                  # '... --- ...'
    morse_to_text(".... ..  / - ....")    # 'HI TH'
    translate({"direction": "text-to-morse", "text": "hi"}).translated
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from dotdash.core.foundation.exceptions import (
    InvalidDirectionError,
    InvalidFormatError,
    InvalidInputError,
    InvalidMorseCodeError,
    MissingInputError,
    UnsupportedCharacterError,
    UnsupportedCharactersError,
)

WORD_SEPARATOR = "/"

_ENCODE = {
    # Letters
    "A": ".-",
    "B": "-...",
    "C": "-.-.",
    "D": "-..",
    "E": ".",
    "F": "..-.",
    "G": "--.",
    "H": "....",
    "I": "..",
    "J": ".---",
    "K": "-.-",
    "L": ".-..",
    "M": "--",
    "N": "-.",
    "O": "---",
    "P": ".--.",
    "Q": "--.-",
    "R": ".-.",
    "S": "...",
    "T": "-",
    "U": "..-",
    "V": "...-",
    "W": ".--",
    "X": "-..-",
    "Y": "-.--",
    "Z": "--..",
    # Digits
    "0": "-----",
    "1": ".----",
    "2": "..---",
    "3": "...--",
    "4": "....-",
    "5": ".....",
    "6": "-....",
    "7": "--...",
    "8": "---..",
    "9": "----.",
    # Punctuation
    ".": ".-.-.-",
    ",": "--..--",
    "?": "..--..",
    "'": ".----.",
    "!": "-.-.--",
    "/": "-..-.",
    "(": "-.--.",
    ")": "-.--.-",
    "&": ".-...",
    ":": "---...",
    ";": "-.-.-.",
    "=": "-...-",
    "+": ".-.-.",
    "-": "-....-",
    "_": "..--.-",
    '"': ".-..-.",
    "$": "...-..-",
    "@": ".--.-.",
    # Word break
    " ": WORD_SEPARATOR,
}

MORSE_CODE_MAP: Mapping[str, str] = MappingProxyType(_ENCODE)
TEXT_MAP: Mapping[str, str] = MappingProxyType({v: k for k, v in _ENCODE.items()})

# Dots, dashes, whitespace and the word separator only.
_MORSE_SYNTAX = re.compile(r"^[.\-\s/]+$")
_WHITESPACE_RUN = re.compile(r"\s+")


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class Direction(str, Enum):
    """Translation direction, serialized as its hyphenated value."""
    TEXT_TO_MORSE = "text-to-morse"
    MORSE_TO_TEXT = "morse-to-text"


@dataclass
class TranslationRequest:
    direction: Union[Direction, str]
    text: Optional[str] = None
    morse: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TranslationRequest":
        return cls(
            direction=data.get("direction"),
            text=data.get("text"),
            morse=data.get("morse"),
        )


@dataclass
class TranslationResult:
    """Outcome of translate(): the original payload and its translation."""
    original: str
    translated: str
    direction: Direction
    timestamp: str = field(default_factory=_utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "translated": self.translated,
            "direction": self.direction.value,
            "timestamp": self.timestamp,
        }


def text_to_morse(text: str) -> str:
    """
    Encode text as space-delimited Morse code.

    Args:
        text: Any non-empty string. Case is ignored.

    Returns:
        One token per input character; spaces become ``/``.

    Raises:
        InvalidInputError: text is empty or not a string
        UnsupportedCharacterError: a character has no Morse pattern
    """
    if not isinstance(text, str) or not text:
        raise InvalidInputError("Invalid text input")

    tokens = []
    for char in text.upper():
        if char == " ":
            tokens.append(WORD_SEPARATOR)
            continue
        code = MORSE_CODE_MAP.get(char)
        if code is None:
            raise UnsupportedCharacterError(char)
        tokens.append(code)
    return " ".join(tokens)


def morse_to_text(morse: str) -> str:
    """
    Decode space-delimited Morse code into uppercase text.

    Leading/trailing whitespace is ignored and runs of whitespace count as a
    single separator, so hand-typed spacing is tolerated.

    Raises:
        InvalidInputError: morse is empty or not a string
        InvalidMorseCodeError: a token matches no Morse pattern
    """
    if not isinstance(morse, str) or not morse:
        raise InvalidInputError("Invalid morse input")

    normalized = _WHITESPACE_RUN.sub(" ", morse.strip())

    chars = []
    for token in normalized.split(" "):
        char = TEXT_MAP.get(token)
        if char is None:
            raise InvalidMorseCodeError(token)
        chars.append(char)
    return "".join(chars)


def validate_morse_code(morse: Any) -> bool:
    """
    Syntactic check: only dots, dashes, whitespace and ``/``.

    A string of valid symbols that spells no known pattern (``"......"``)
    still passes; morse_to_text() is what rejects it.
    """
    if not isinstance(morse, str) or not morse:
        return False
    return _MORSE_SYNTAX.match(morse) is not None


def validate_text(text: Any) -> bool:
    """True if every character of ``text`` can be encoded."""
    if not isinstance(text, str) or not text:
        return False
    return all(char == " " or char in MORSE_CODE_MAP for char in text.upper())


def get_supported_characters() -> List[str]:
    """Encodable characters in table order (letters, digits, punctuation)."""
    return [char for char in MORSE_CODE_MAP if char != " "]


def translate(request: Union[TranslationRequest, Mapping[str, Any]]) -> TranslationResult:
    """
    Validate a request and dispatch it to the matching codec direction.

    Args:
        request: TranslationRequest or a mapping with ``direction`` and
            ``text`` or ``morse``

    Returns:
        TranslationResult with a fresh UTC timestamp

    Raises:
        InvalidDirectionError: direction is not a known Direction
        MissingInputError: the payload for the direction is absent
        UnsupportedCharactersError: text fails validate_text()
        InvalidFormatError: morse fails validate_morse_code()
        InvalidMorseCodeError: morse is well-formed but undecodable
    """
    if not isinstance(request, TranslationRequest):
        request = TranslationRequest.from_dict(request)

    try:
        direction = Direction(request.direction)
    except ValueError:
        raise InvalidDirectionError(
            'Invalid direction. Must be "text-to-morse" or "morse-to-text"'
        ) from None

    if direction is Direction.TEXT_TO_MORSE:
        if not request.text:
            raise MissingInputError("Text is required for text-to-morse translation")
        if not validate_text(request.text):
            raise UnsupportedCharactersError("Text contains unsupported characters")
        return TranslationResult(
            original=request.text,
            translated=text_to_morse(request.text),
            direction=direction,
        )

    if not request.morse:
        raise MissingInputError("Morse code is required for morse-to-text translation")
    if not validate_morse_code(request.morse):
        raise InvalidFormatError("Invalid morse code format")
    return TranslationResult(
        original=request.morse,
        translated=morse_to_text(request.morse),
        direction=direction,
    )
