from __future__ import annotations

from enum import Enum, auto
from typing import Dict, Tuple


class InputAction(Enum):
    """Logical inputs understood by the game engine.

    Drivers translate physical keys into these actions so the engine never
    sees raw key codes.
    """

    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    CONFIRM = auto()  # e.g., Enter
    QUIT = auto()  # e.g., q / Ctrl+C

    @property
    def is_movement(self) -> bool:
        return self in MOVE_DELTAS


# (d_row, d_col) for each movement action
MOVE_DELTAS: Dict[InputAction, Tuple[int, int]] = {
    InputAction.MOVE_UP: (-1, 0),
    InputAction.MOVE_DOWN: (1, 0),
    InputAction.MOVE_LEFT: (0, -1),
    InputAction.MOVE_RIGHT: (0, 1),
}


__all__ = ["InputAction", "MOVE_DELTAS"]
