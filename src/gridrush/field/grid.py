from __future__ import annotations

import logging
import random
from typing import Iterator, List, Optional, Sequence, Tuple

from ..exceptions import FieldFullError
from .cells import Cell, cell_for_glyph

logger = logging.getLogger(__name__)


class Field:
    """A fixed-size, bounds-checked grid of cells surrounded by a border.

    Coordinates are ``(row, col)`` with ``(0, 0)`` at the top-left corner.
    The outer ring always holds border cells after :meth:`clear`; players,
    items and enemies may only be placed on interior cells. The grid itself
    is the single source of truth for what occupies a position.
    """

    __slots__ = ("_h", "_w", "_cells")

    def __init__(self, height: int, width: int) -> None:
        if height < 3 or width < 3:
            raise ValueError("Field needs at least one interior cell (minimum 3x3)")
        self._h = int(height)
        self._w = int(width)
        # cells[row][col]
        self._cells: List[List[Cell]] = [[Cell.EMPTY for _ in range(self._w)] for _ in range(self._h)]
        self.clear()
        logger.debug("Initialized Field %dx%d", self._h, self._w)

    @property
    def height(self) -> int:
        return self._h

    @property
    def width(self) -> int:
        return self._w

    def is_within(self, row: int, col: int) -> bool:
        return 0 <= row < self._h and 0 <= col < self._w

    def is_interior(self, row: int, col: int) -> bool:
        """Return True if (row, col) is inside the border ring. Never raises."""
        return 1 <= row <= self._h - 2 and 1 <= col <= self._w - 2

    def get(self, row: int, col: int) -> Cell:
        """Return the cell at (row, col).

        Raises IndexError if out of bounds.
        """
        if not self.is_within(row, col):
            raise IndexError(f"Coordinates out of bounds: ({row}, {col}) for field {self._h}x{self._w}")
        return self._cells[row][col]

    def set(self, row: int, col: int, cell: Cell) -> None:
        """Set the cell at (row, col).

        Raises IndexError if out of bounds and TypeError for non-Cell values.
        """
        if not isinstance(cell, Cell):
            raise TypeError("cell must be a Cell enum member")
        if not self.is_within(row, col):
            raise IndexError(f"Coordinates out of bounds: ({row}, {col}) for field {self._h}x{self._w}")
        self._cells[row][col] = cell

    def clear(self) -> None:
        """Empty every cell, then draw the border ring."""
        last_row = self._h - 1
        last_col = self._w - 1
        for row in self._cells:
            for col in range(self._w):
                row[col] = Cell.EMPTY

        for col in range(1, last_col):
            self._cells[0][col] = Cell.HORIZONTAL
            self._cells[last_row][col] = Cell.HORIZONTAL
        for row in range(1, last_row):
            self._cells[row][0] = Cell.VERTICAL
            self._cells[row][last_col] = Cell.VERTICAL

        for row, col in ((0, 0), (0, last_col), (last_row, 0), (last_row, last_col)):
            self._cells[row][col] = Cell.CORNER

    def interior_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield interior coordinates in row-major order."""
        for row in range(1, self._h - 1):
            for col in range(1, self._w - 1):
                yield (row, col)

    def count(self, cell: Cell) -> int:
        return sum(1 for row in self._cells for c in row if c is cell)

    def find(self, cell: Cell) -> List[Tuple[int, int]]:
        """Return every coordinate holding *cell*, in row-major order."""
        return [
            (r, c)
            for r, row in enumerate(self._cells)
            for c, value in enumerate(row)
            if value is cell
        ]

    def empty_interior_count(self) -> int:
        return sum(1 for r, c in self.interior_cells() if self._cells[r][c] is Cell.EMPTY)

    def has_empty_interior(self) -> bool:
        return any(self._cells[r][c] is Cell.EMPTY for r, c in self.interior_cells())

    def random_empty_interior_cell(self, rng: Optional[random.Random] = None) -> Tuple[int, int]:
        """Pick a uniformly random empty interior cell.

        Coordinates are drawn over the whole interior and redrawn until an
        empty one comes up.

        Raises:
            FieldFullError: if no interior cell is empty.
        """
        if not self.has_empty_interior():
            raise FieldFullError(f"No empty interior cell left on {self._h}x{self._w} field")
        rng = rng or random
        while True:
            row = rng.randrange(1, self._h - 1)
            col = rng.randrange(1, self._w - 1)
            if self._cells[row][col] is Cell.EMPTY:
                return row, col

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "Field":
        """Create a Field from its rendered glyph rows.

        The rows are taken verbatim, border included; this is mostly useful for
        setting up exact positions in tests and debugging sessions.
        """
        if not lines:
            raise ValueError("lines must not be empty")
        width = len(lines[0])
        for i, row in enumerate(lines):
            if len(row) != width:
                raise ValueError(f"All rows must have equal width; row 0 has {width}, row {i} has {len(row)}")

        field = cls(len(lines), width)
        for r, row in enumerate(lines):
            for c, ch in enumerate(row):
                field.set(r, c, cell_for_glyph(ch))
        return field

    def to_lines(self) -> List[str]:
        """Render the grid as one glyph string per row."""
        return ["".join(cell.glyph for cell in row) for row in self._cells]

    def __repr__(self) -> str:
        return f"Field(height={self._h}, width={self._w})"
