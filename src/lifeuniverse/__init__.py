"""Toroidal Conway's Game of Life universe with a flat, directly readable cell buffer."""

__version__ = "0.1.0"

from .core.universe import Cell, Universe
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Cell", "Universe", "Pattern", "PatternLibrary"]
