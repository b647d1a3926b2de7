from dataclasses import dataclass


@dataclass(frozen=True)
class FieldConfig:
    """Compile-time dimensions of the playing field.

    Sizes are given for the interior only; the border ring adds one cell on
    every side.
    """

    # Playable area (cells)
    width: int = 60
    height: int = 30

    # Where the player appears after every reset (row, col)
    start_row: int = 1
    start_col: int = 1

    @property
    def grid_width(self) -> int:
        return self.width + 2

    @property
    def grid_height(self) -> int:
        return self.height + 2


FIELD = FieldConfig()
