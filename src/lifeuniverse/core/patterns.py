"""Common Conway's Game of Life patterns and pattern management."""

from typing import Dict, List, Tuple, Optional, Any
import json
from pathlib import Path

from .universe import Universe


class Pattern:
    """Represents a Game of Life pattern as (row, column) offsets of live cells."""

    def __init__(
        self,
        name: str,
        cells: List[Tuple[int, int]],
        description: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, column) coordinates for living cells
            description: Optional description
            metadata: Optional metadata dictionary
        """
        self.name = name
        self.cells = [tuple(cell) for cell in cells]
        self.description = description
        self.metadata = metadata or {}

    def apply_to_universe(
        self, universe: Universe, row_offset: int = 0, column_offset: int = 0, clear: bool = True
    ) -> int:
        """Place this pattern into a universe.

        Cells that land outside the universe are skipped rather than wrapped.

        Args:
            universe: Target universe
            row_offset: Vertical offset
            column_offset: Horizontal offset
            clear: Kill every cell before placing the pattern

        Returns:
            Number of pattern cells that were placed
        """
        if clear:
            for row, column in universe.alive_cells():
                universe.set_cell(row, column, False)

        placed = 0
        for row, column in self.cells:
            try:
                universe.set_cell(row + row_offset, column + column_offset, True)
            except IndexError:
                continue
            placed += 1
        return placed

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_column, max_row, max_column)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, columns = zip(*self.cells)
        return (min(rows), min(columns), max(rows), max(columns))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (height, width)."""
        min_row, min_column, max_row, max_column = self.get_bounding_box()
        return (max_row - min_row + 1, max_column - min_column + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates shifted to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description, self.metadata.copy())

        min_row, min_column, _, _ = self.get_bounding_box()
        normalized_cells = [(row - min_row, column - min_column) for row, column in self.cells]

        return Pattern(self.name, normalized_cells, self.description, self.metadata.copy())

    def to_dict(self) -> Dict[str, Any]:
        """Convert pattern to dictionary for serialization."""
        return {
            "name": self.name,
            "cells": [list(cell) for cell in self.cells],
            "description": self.description,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        """Create pattern from dictionary.

        Args:
            data: Dictionary with pattern data

        Returns:
            New Pattern instance

        Raises:
            ValueError: If a cell entry is not a (row, column) pair
        """
        cells = []
        for cell in data["cells"]:
            try:
                row, column = cell
                cells.append((int(row), int(column)))
            except (TypeError, ValueError):
                raise ValueError(f"Pattern cell must be a (row, column) pair, got {cell!r}") from None

        return cls(
            name=data["name"],
            cells=cells,
            description=data.get("description", ""),
            metadata=data.get("metadata", {}),
        )

    @classmethod
    def from_universe(cls, universe: Universe, name: str, description: str = "") -> "Pattern":
        """Create pattern from the living cells of a universe."""
        cells = universe.alive_cells()
        metadata = {"source_size": [universe.height, universe.width], "population": len(cells)}

        return cls(name, cells, description, metadata)


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize pattern library.

        Args:
            storage_dir: Directory for storing patterns (defaults to 'patterns')
        """
        self.storage_dir = Path(storage_dir or "patterns")
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life patterns
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))
        self.add_pattern(
            Pattern("Beehive", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)], "Beehive still life")
        )
        self.add_pattern(
            Pattern("Loaf", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 3), (3, 2)], "Loaf still life")
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(1, 0), (1, 1), (1, 2)], "Period-2 oscillator"))
        self.add_pattern(
            Pattern("Toad", [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)], "Period-2 oscillator")
        )
        self.add_pattern(
            Pattern("Beacon", [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)], "Period-2 oscillator")
        )

        # Spaceships
        self.add_pattern(
            Pattern("Glider", [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)], "Smallest spaceship, period-4")
        )
        self.add_pattern(
            Pattern(
                "Lightweight Spaceship",
                [(0, 0), (0, 3), (1, 4), (2, 0), (2, 4), (3, 1), (3, 2), (3, 3), (3, 4)],
                "LWSS - Period-4 spaceship",
            )
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Diehard",
                [(0, 6), (1, 0), (1, 1), (2, 1), (2, 5), (2, 6), (2, 7)],
                "Dies after exactly 130 generations",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if it is unknown."""
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        categories = {
            "Still Life": ["Block", "Beehive", "Loaf"],
            "Oscillators": ["Blinker", "Toad", "Beacon"],
            "Spaceships": ["Glider", "Lightweight Spaceship"],
            "Methuselahs": ["R-pentomino", "Diehard"],
            "Custom": [],
        }

        all_builtin = set()
        for cat_patterns in categories.values():
            all_builtin.update(cat_patterns)

        for name in self._patterns:
            if name not in all_builtin:
                categories["Custom"].append(name)

        return {cat: patterns for cat, patterns in categories.items() if patterns}

    def save_pattern(self, pattern: Pattern, filename: Optional[str] = None) -> Path:
        """Save a pattern to disk as JSON.

        Args:
            pattern: Pattern to save
            filename: Optional filename (defaults to pattern name)

        Returns:
            Path of the written file
        """
        if filename is None:
            filename = f"{pattern.name.replace(' ', '_').lower()}.json"

        self.storage_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.storage_dir / filename
        with open(filepath, "w") as f:
            json.dump(pattern.to_dict(), f, indent=2)
        return filepath

    def load_pattern(self, filename: str) -> Pattern:
        """Load a pattern from disk and add it to the library.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is invalid
        """
        filepath = self.storage_dir / filename

        with open(filepath, "r") as f:
            data = json.load(f)

        pattern = Pattern.from_dict(data)
        self.add_pattern(pattern)
        return pattern

    def load_all_patterns(self) -> List[str]:
        """Load every pattern in the storage directory.

        Returns:
            Names of the patterns that loaded
        """
        loaded = []
        if not self.storage_dir.is_dir():
            return loaded

        for filepath in sorted(self.storage_dir.glob("*.json")):
            try:
                loaded.append(self.load_pattern(filepath.name).name)
            except (ValueError, KeyError) as e:
                print(f"Warning: Failed to load pattern from {filepath.name}: {e}")
        return loaded

    def save_universe_as_pattern(
        self,
        universe: Universe,
        name: str,
        description: str = "",
        filename: Optional[str] = None,
    ) -> Pattern:
        """Capture the living cells of a universe as a new pattern.

        The pattern is written to disk only when ``filename`` is given.
        """
        pattern = Pattern.from_universe(universe, name, description)
        self.add_pattern(pattern)

        if filename is not None:
            self.save_pattern(pattern, filename)

        return pattern
