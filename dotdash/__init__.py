"""
Dotdash
=======

Text to International Morse Code translation service.

    from dotdash import text_to_morse, morse_to_text
    text_to_morse("SOS")        # "... --- ..."
    morse_to_text("... --- ...")  # "SOS"
"""

__version__ = "1.0.0"

from dotdash.core.codec import (
    get_supported_characters,
    morse_to_text,
    text_to_morse,
    translate,
    validate_morse_code,
    validate_text,
)

__all__ = [
    "__version__",
    "text_to_morse",
    "morse_to_text",
    "validate_morse_code",
    "validate_text",
    "get_supported_characters",
    "translate",
]
