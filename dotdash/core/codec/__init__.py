"""
Morse codec: text <-> International Morse Code.

    from dotdash.core.codec import text_to_morse, morse_to_text
"""

from .morse import (
    MORSE_CODE_MAP,
    TEXT_MAP,
    WORD_SEPARATOR,
    Direction,
    TranslationRequest,
    TranslationResult,
    get_supported_characters,
    morse_to_text,
    text_to_morse,
    translate,
    validate_morse_code,
    validate_text,
)

__all__ = [
    'MORSE_CODE_MAP',
    'TEXT_MAP',
    'WORD_SEPARATOR',
    'Direction',
    'TranslationRequest',
    'TranslationResult',
    'text_to_morse',
    'morse_to_text',
    'validate_morse_code',
    'validate_text',
    'get_supported_characters',
    'translate',
]
