"""
The playing field: cell types and the bordered grid that holds them.
"""
from .cells import Cell
from .grid import Field

__all__ = [
    "Cell",
    "Field",
]
