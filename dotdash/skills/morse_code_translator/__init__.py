"""Morse code translator skill."""

from .tools import ACTIONS, morse_tool

__all__ = ["morse_tool", "ACTIONS"]
