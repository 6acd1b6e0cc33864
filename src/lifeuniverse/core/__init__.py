"""Core cellular automaton logic."""

from .universe import Cell, Universe, DEFAULT_WIDTH, DEFAULT_HEIGHT
from .patterns import Pattern, PatternLibrary

__all__ = ["Cell", "Universe", "DEFAULT_WIDTH", "DEFAULT_HEIGHT", "Pattern", "PatternLibrary"]
