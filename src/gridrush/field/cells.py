from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class Cell(Enum):
    """Enumeration of everything a field position can hold.

    The three border variants only ever appear on the outer ring; the
    occupants (player, item, enemy) only ever appear in the interior.
    """

    EMPTY = 0
    CORNER = 1
    HORIZONTAL = 2
    VERTICAL = 3
    PLAYER = 4
    ITEM = 5
    ENEMY = 6

    @property
    def glyph(self) -> str:
        return GLYPHS[self]

    @property
    def is_border(self) -> bool:
        return self in BORDER_CELLS


BORDER_CELLS: FrozenSet[Cell] = frozenset({Cell.CORNER, Cell.HORIZONTAL, Cell.VERTICAL})

GLYPHS: Dict[Cell, str] = {
    Cell.EMPTY: " ",
    Cell.CORNER: "+",
    Cell.HORIZONTAL: "-",
    Cell.VERTICAL: "|",
    Cell.PLAYER: "0",
    Cell.ITEM: "$",
    Cell.ENEMY: "X",
}


def cell_for_glyph(glyph: str) -> Cell:
    """Return the Cell rendered as *glyph*.

    Raises:
        ValueError: if no cell uses that glyph.
    """
    for cell, ch in GLYPHS.items():
        if ch == glyph:
            return cell
    raise ValueError(f"Unknown glyph: {glyph!r}")


__all__ = ["Cell", "BORDER_CELLS", "GLYPHS", "cell_for_glyph"]
