"""
Grid Rush package root.

A small turn-based terminal game: steer the player token around a bordered
field, collect items and stay clear of the randomly roaming enemies. The
engine modules are pure domain logic; terminal, headless and window drivers
live in :mod:`gridrush.app`.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "engine",
    "field",
    "input",
]
