"""Foundation types shared across dotdash: errors and fixed defaults."""

from .config_defaults import DEFAULTS, DotdashDefaults
from .exceptions import (
    DotdashError,
    InvalidDirectionError,
    InvalidFormatError,
    InvalidInputError,
    InvalidMorseCodeError,
    MissingInputError,
    MorseError,
    TranslationRequestError,
    UnsupportedCharacterError,
    UnsupportedCharactersError,
)

__all__ = [
    'DEFAULTS',
    'DotdashDefaults',
    'DotdashError',
    'MorseError',
    'InvalidInputError',
    'UnsupportedCharacterError',
    'InvalidMorseCodeError',
    'TranslationRequestError',
    'MissingInputError',
    'UnsupportedCharactersError',
    'InvalidFormatError',
    'InvalidDirectionError',
]
