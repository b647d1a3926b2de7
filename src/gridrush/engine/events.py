from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameEngine to notify drivers or other observers."""

    PLAYER_MOVED = auto()
    ITEM_COLLECTED = auto()
    ENEMY_SPAWNED = auto()
    GAME_OVER = auto()
    RESET = auto()


class GamePhase(Enum):
    """The two states of the engine's state machine."""

    PLAYING = auto()
    GAME_OVER = auto()
