"""
Input abstraction layer for Grid Rush.

Exposes:
- InputAction: The six logical inputs the engine understands.
- InputMapper: Rebindable mapping from physical key names to actions.
"""
from .actions import MOVE_DELTAS, InputAction
from .mapping import InputMapper

__all__ = [
    "InputAction",
    "InputMapper",
    "MOVE_DELTAS",
]
