from .events import GameEvent, GamePhase
from .game_state import GameEngine

__all__ = [
    "GameEngine",
    "GameEvent",
    "GamePhase",
]
