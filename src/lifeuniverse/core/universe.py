"""Toroidal Game of Life universe backed by a flat cell buffer."""

from enum import IntEnum
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import numpy as np
import torch
import torch.nn.functional as F


DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 64

ALIVE_GLYPH = "⬛"
DEAD_GLYPH = "⬜"


class Cell(IntEnum):
    """State of a single cell. One byte per cell, so counts are plain sums."""

    DEAD = 0
    ALIVE = 1


CellState = Union[Cell, bool, int]


def _to_cell(value: CellState) -> Cell:
    if value is True or value is False:
        return Cell.ALIVE if value else Cell.DEAD
    try:
        if int(value) != value:
            raise ValueError
        return Cell(int(value))
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid cell state: {value!r}") from None


def _to_dimension(value: int) -> int:
    try:
        if int(value) != value:
            raise ValueError
        size = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Universe dimensions must be whole numbers, got {value!r}") from None
    return size


class Universe:
    """A width x height torus of cells evolving under Conway's rules.

    Cells are stored row-major in a contiguous ``uint8`` buffer where the
    cell at ``(row, column)`` lives at ``row * width + column``. Two buffers
    are kept; ``tick`` writes the next generation into the back buffer and
    then swaps, so every cell is computed from the same generation.
    """

    def __init__(self, width: int, height: int, cells: Optional[Sequence[CellState]] = None) -> None:
        """Create a universe.

        Args:
            width: Number of columns
            height: Number of rows
            cells: Optional row-major states, ``width * height`` of them.
                All cells start dead when omitted.

        Raises:
            ValueError: If a dimension is not a positive integer or ``cells``
                has the wrong length or holds an invalid state
        """
        self._width = _to_dimension(width)
        self._height = _to_dimension(height)
        if self._width <= 0 or self._height <= 0:
            raise ValueError(f"Universe dimensions must be positive, got {width}x{height}")

        size = self._width * self._height

        self._buffers = [np.zeros(size, dtype=np.uint8), np.zeros(size, dtype=np.uint8)]
        self._views = []
        for buffer in self._buffers:
            view = buffer.view()
            view.flags.writeable = False
            self._views.append(view)
        self._front = 0
        self._generation = 0

        if cells is not None:
            if len(cells) != size:
                raise ValueError(f"Expected {size} cells for a {self._width}x{self._height} universe, got {len(cells)}")
            self._cells[:] = [_to_cell(value) for value in cells]

        self._torch_input = torch.zeros(1, 1, self._height, self._width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @classmethod
    def new(cls, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> "Universe":
        """Create a universe seeded with the reproducible default lattice.

        Cell ``i`` starts alive when ``i`` is a multiple of 2 or of 7.
        """
        universe = cls(width, height)
        index = np.arange(universe._width * universe._height)
        universe._cells[:] = (index % 2 == 0) | (index % 7 == 0)
        return universe

    @classmethod
    def from_cells(cls, width: int, height: int, states: Mapping[Tuple[int, int], CellState]) -> "Universe":
        """Create a universe from an explicit ``{(row, column): state}`` mapping.

        Unmapped cells are dead.

        Raises:
            IndexError: If a coordinate lies outside the universe
        """
        universe = cls(width, height)
        for (row, column), state in states.items():
            universe.set_cell(row, column, _to_cell(state) == Cell.ALIVE)
        return universe

    @classmethod
    def from_alive(cls, width: int, height: int, coordinates: Iterable[Tuple[int, int]]) -> "Universe":
        """Create a universe where only the given ``(row, column)`` cells are alive."""
        universe = cls(width, height)
        for row, column in coordinates:
            universe.set_cell(row, column, True)
        return universe

    @property
    def _cells(self) -> np.ndarray:
        return self._buffers[self._front]

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    def get_width(self) -> int:
        """Number of columns."""
        return self._width

    def get_height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (height, width)."""
        return (self._height, self._width)

    @property
    def generation(self) -> int:
        """Number of ticks applied since construction."""
        return self._generation

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._cells))

    def get_cells(self) -> np.ndarray:
        """Return a read-only view of the live cell buffer.

        The view is contiguous, row-major with stride ``width``, and is the
        same object on every call until the next ``tick()``. It must not be
        kept across a ``tick()``: the buffer behind it becomes the back
        buffer and is overwritten by the following generation.
        """
        return self._views[self._front]

    def to_grid(self) -> np.ndarray:
        """Read-only ``(height, width)`` view of the current cells."""
        return self.get_cells().reshape(self._height, self._width)

    def _check_bounds(self, row: int, column: int) -> None:
        if not (0 <= row < self._height and 0 <= column < self._width):
            raise IndexError(
                f"Coordinates ({row}, {column}) out of bounds for a {self._width}x{self._height} universe"
            )

    def get_index(self, row: int, column: int) -> int:
        """Buffer index of ``(row, column)``.

        Raises:
            IndexError: If the coordinates are out of bounds
        """
        self._check_bounds(row, column)
        return row * self._width + column

    def is_alive(self, row: int, column: int) -> bool:
        """Whether the cell at ``(row, column)`` is alive."""
        return bool(self._cells[self.get_index(row, column)])

    def set_cell(self, row: int, column: int, alive: bool) -> None:
        """Set a single cell alive or dead."""
        self._cells[self.get_index(row, column)] = Cell.ALIVE if alive else Cell.DEAD

    def toggle_cell(self, row: int, column: int) -> None:
        """Flip the cell at ``(row, column)`` between alive and dead.

        Raises:
            IndexError: If the coordinates are out of bounds
        """
        index = self.get_index(row, column)
        self._cells[index] ^= 1

    def live_neighbor_count(self, row: int, column: int) -> int:
        """Count live cells in the Moore neighborhood, wrapping on both axes."""
        self._check_bounds(row, column)
        cells = self._cells
        count = 0
        for delta_row in (-1, 0, 1):
            for delta_column in (-1, 0, 1):
                if delta_row == 0 and delta_column == 0:
                    continue

                neighbor_row = (row + delta_row + self._height) % self._height
                neighbor_column = (column + delta_column + self._width) % self._width
                count += int(cells[neighbor_row * self._width + neighbor_column])

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Live neighbor counts for every cell, as a flat row-major array.

        Circular padding followed by a 3x3 convolution gives the same result
        as ``live_neighbor_count`` on every cell, including on grids one or
        two cells wide where a neighbor may be counted more than once.
        """
        grid = self._cells.reshape(self._height, self._width)
        self._torch_input[0, 0] = torch.from_numpy(grid.astype(np.float32))

        padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, self._torch_kernel)

        return neighbors[0, 0].to(torch.uint8).numpy().reshape(-1)

    def tick(self) -> None:
        """Advance the universe by exactly one generation."""
        current = self._cells
        following = self._buffers[1 - self._front]

        counts = self.count_all_neighbors()
        alive = current == Cell.ALIVE

        # Birth on 3; survival on 2 or 3; everything else dies or stays dead
        following[:] = (counts == 3) | (alive & (counts == 2))

        self._front = 1 - self._front
        self._generation += 1

    def alive_cells(self) -> List[Tuple[int, int]]:
        """Sorted ``(row, column)`` coordinates of every living cell."""
        indices = np.flatnonzero(self._cells)
        return [(int(index) // self._width, int(index) % self._width) for index in indices]

    def render(self) -> str:
        """Text view of the grid: one line per row, each row ending in a newline."""
        lines = []
        for line in self.to_grid():
            lines.append("".join(ALIVE_GLYPH if cell else DEAD_GLYPH for cell in line))
            lines.append("\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Universe(width={self._width}, height={self._height}, population={self.population})"

    def __eq__(self, other: object) -> bool:
        """Check if two universes hold the same cells."""
        if not isinstance(other, Universe):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)
