from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Tuple

from ..config import FIELD, FieldConfig
from ..exceptions import FieldFullError
from ..field import Cell, Field
from ..input.actions import MOVE_DELTAS, InputAction
from .events import GameEvent, GamePhase

logger = logging.getLogger(__name__)

# Player plus the first item
MIN_INTERIOR_CELLS = 2

# A collected item is replaced by one new item and one new enemy
SPAWNS_PER_PICKUP = 2

# Neighbour order an enemy picks from: up, right, down, left
ENEMY_STEPS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))

GAME_OVER_TEMPLATE = (
    "\n\n\n\n\n"
    "          You died, Game Over!"
    "\n\n"
    "          Your score: {score}"
    "\n\n"
    "          Press enter to restart or q to quit"
)


class GameEngine:
    """Holds the state of one game: field, player position, score and game-over flag.

    The engine is a synchronous state machine. A driver feeds it one
    :class:`InputAction` at a time through :meth:`handle_input` and draws
    whatever :meth:`render` returns; nothing happens between inputs.
    """

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or FIELD
        if self.config.width * self.config.height < MIN_INTERIOR_CELLS:
            raise ValueError(
                f"Field interior must have at least {MIN_INTERIOR_CELLS} cells, "
                f"got {self.config.width}x{self.config.height}"
            )
        self._rng = rng if rng is not None else random.Random(seed)
        self._listeners: List[Callable[[GameEvent, "GameEngine"], None]] = []
        self.field = Field(self.config.grid_height, self.config.grid_width)
        self.player_row: int = self.config.start_row
        self.player_col: int = self.config.start_col
        self.score: int = 0
        self.game_over: bool = False
        self.reset()

    # ---------- Observers ----------
    def add_listener(self, listener: Callable[[GameEvent, "GameEngine"], None]) -> None:
        """Subscribe to game events (movement, pickups, spawns, game over, reset)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for l in list(self._listeners):
            try:
                l(event, self)
            except Exception as ex:  # pragma: no cover - listeners shouldn't crash engine
                logger.exception("Listener errored on %s: %s", event, ex)

    # ---------- State ----------
    @property
    def phase(self) -> GamePhase:
        return GamePhase.GAME_OVER if self.game_over else GamePhase.PLAYING

    @property
    def player_pos(self) -> Tuple[int, int]:
        return self.player_row, self.player_col

    def reset(self) -> None:
        """Start a fresh game: border, player at the start cell, one item, score 0."""
        self.field.clear()
        self.score = 0
        self.game_over = False

        self.player_row = self.config.start_row
        self.player_col = self.config.start_col
        self.field.set(self.player_row, self.player_col, Cell.PLAYER)

        self.spawn_item()
        logger.info("Game reset; player at %s", self.player_pos)
        self._emit(GameEvent.RESET)

    def spawn_item(self) -> Tuple[int, int]:
        row, col = self.field.random_empty_interior_cell(self._rng)
        self.field.set(row, col, Cell.ITEM)
        logger.debug("Spawned item at (%d, %d)", row, col)
        return row, col

    def spawn_enemy(self) -> Tuple[int, int]:
        row, col = self.field.random_empty_interior_cell(self._rng)
        self.field.set(row, col, Cell.ENEMY)
        logger.debug("Spawned enemy at (%d, %d)", row, col)
        self._emit(GameEvent.ENEMY_SPAWNED)
        return row, col

    def _end_game(self) -> None:
        self.game_over = True
        logger.info("Game over with score %d", self.score)
        self._emit(GameEvent.GAME_OVER)

    # ---------- Input ----------
    def handle_input(self, action: Optional[InputAction]) -> bool:
        """Apply one input to the game.

        Returns False when the driver should stop (QUIT), True otherwise.
        Anything that is not an InputAction is ignored.
        """
        if action is InputAction.QUIT:
            logger.debug("Quit requested")
            return False

        if not isinstance(action, InputAction):
            logger.debug("Ignoring unrecognized input %r", action)
            return True

        if self.game_over:
            if action is InputAction.CONFIRM:
                self.reset()
            return True

        if action.is_movement:
            dr, dc = MOVE_DELTAS[action]
            self.move_player(dr, dc)
            if not self.game_over:
                self.move_enemies()
        return True

    def move_player(self, dr: int, dc: int) -> None:
        """Move the player one cell by (dr, dc), resolving pickups and enemy contact.

        Targets outside the interior leave the player where it is.

        Raises:
            FieldFullError: if an item is collected but the field has no room
                for the new item and enemy. The engine state is left untouched.
        """
        if self.game_over:
            return

        tr = self.player_row + dr
        tc = self.player_col + dc
        if not self.field.is_interior(tr, tc):
            logger.debug("Blocked move by (%d, %d) from %s", dr, dc, self.player_pos)
            return

        target = self.field.get(tr, tc)
        # the player's current cell is freed by the move and counts as room
        if target is Cell.ITEM and self.field.empty_interior_count() + 1 < SPAWNS_PER_PICKUP:
            raise FieldFullError(f"No room to spawn after collecting the item at ({tr}, {tc})")

        self.field.set(self.player_row, self.player_col, Cell.EMPTY)

        if target is Cell.ENEMY:
            logger.debug("Player ran into enemy at (%d, %d)", tr, tc)
            self._end_game()
            return

        if target is Cell.ITEM:
            self.score += 1
            logger.debug("Collected item at (%d, %d); score=%d", tr, tc, self.score)
            self._emit(GameEvent.ITEM_COLLECTED)
            self.spawn_item()
            self.spawn_enemy()

        self.field.set(tr, tc, Cell.PLAYER)
        self.player_row = tr
        self.player_col = tc
        logger.debug("Player moved to %s", self.player_pos)
        self._emit(GameEvent.PLAYER_MOVED)

    def move_enemies(self) -> None:
        """Run one pass of random enemy movement.

        Cells are scanned once in row-major order and updated in place, so an
        enemy that steps right or down onto a cell not yet scanned may move
        again in the same pass. An enemy stepping onto the player ends the game
        and stops the pass.
        """
        if self.game_over:
            return

        for row, col in self.field.interior_cells():
            if self.field.get(row, col) is not Cell.ENEMY:
                continue

            dr, dc = self._rng.choice(ENEMY_STEPS)
            tr, tc = row + dr, col + dc
            target = self.field.get(tr, tc)

            if target is Cell.EMPTY:
                self.field.set(tr, tc, Cell.ENEMY)
                self.field.set(row, col, Cell.EMPTY)
            elif target is Cell.PLAYER:
                logger.debug("Enemy at (%d, %d) caught the player", row, col)
                self._end_game()
                return
            # border, item or another enemy: blocked

    # ---------- Output ----------
    def render(self) -> str:
        """Return the frame to display: the grid, or the game-over summary."""
        if self.game_over:
            return GAME_OVER_TEMPLATE.format(score=self.score)
        return "".join(line + "\n" for line in self.field.to_lines())


__all__ = ["GameEngine", "ENEMY_STEPS", "GAME_OVER_TEMPLATE", "MIN_INTERIOR_CELLS"]
