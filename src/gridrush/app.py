from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from .engine import GameEngine
from .input import InputMapper

logger = logging.getLogger(__name__)

GUI_KEY_NAMES = (
    "UP", "DOWN", "LEFT", "RIGHT",
    "ENTER", "RETURN", "ESCAPE",
    "W", "A", "S", "D", "Q",
)


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def _curses_available() -> bool:
    try:
        import curses  # noqa: F401
        return True
    except Exception:
        return False


def curses_key_name(key: int) -> Optional[str]:
    """Translate a curses key code into a canonical key name for InputMapper."""
    import curses

    special = {
        curses.KEY_UP: "UP",
        curses.KEY_DOWN: "DOWN",
        curses.KEY_LEFT: "LEFT",
        curses.KEY_RIGHT: "RIGHT",
        curses.KEY_ENTER: "ENTER",
        10: "ENTER",
        13: "ENTER",
        27: "ESCAPE",
        3: "CTRL+C",
    }
    if key in special:
        return special[key]
    if 32 < key < 127:
        return chr(key)
    return None


def _draw_frame(screen, frame: str) -> None:
    import curses

    screen.erase()
    for y, line in enumerate(frame.split("\n")):
        try:
            screen.addstr(y, 0, line)
        except curses.error:
            # Terminal smaller than the frame; the rest is clipped
            break
    screen.refresh()


def run_terminal(engine: Optional[GameEngine] = None, mapper: Optional[InputMapper] = None) -> int:
    """Run the game full-screen in the terminal using curses.

    Returns:
        Process exit code (0 on quit, 130 on Ctrl+C, 1 on unexpected errors).
    """
    if not _curses_available():
        logger.error("curses is not available on this platform; try --headless or --gui")
        print("Unexpected error: curses is not available on this platform")
        return 1

    import curses

    engine = engine or GameEngine()
    mapper = mapper or InputMapper.default()

    def _loop(screen) -> None:
        curses.curs_set(0)
        screen.keypad(True)
        _draw_frame(screen, engine.render())
        while True:
            key = screen.getch()
            action = mapper.translate_key(curses_key_name(key))
            if not engine.handle_input(action):
                return
            _draw_frame(screen, engine.render())

    try:
        logger.info("Starting terminal session")
        curses.wrapper(_loop)
        logger.info("Terminal session finished (score=%d)", engine.score)
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as ex:
        logger.exception("Unhandled exception in terminal loop")
        print(f"Unexpected error: {ex}")
        return 1


def run_gui(engine: Optional[GameEngine] = None, mapper: Optional[InputMapper] = None) -> int:
    """Run the game in an Arcade window if available, otherwise in the terminal."""
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to terminal mode")
        return run_terminal(engine, mapper)

    import arcade

    engine = engine or GameEngine()
    mapper = mapper or InputMapper.default()
    for name in GUI_KEY_NAMES:
        symbol = getattr(arcade.key, name, None)
        if symbol is not None:
            mapper.set_alias(symbol, name)

    font_size = 12
    line_height = int(font_size * 1.5)
    width = engine.field.width * font_size + 40
    height = engine.field.height * line_height + 40

    class GameWindow(arcade.Window):
        def __init__(self) -> None:
            super().__init__(width, height, title="Grid Rush")
            self.background_color = arcade.color.BLACK

        def on_draw(self):
            self.clear()
            arcade.draw_text(
                engine.render(),
                20,
                self.height - 20,
                arcade.color.ASH_GREY,
                font_size,
                width=self.width - 40,
                multiline=True,
                font_name="Courier New",
                anchor_y="top",
            )

        def on_key_press(self, symbol: int, modifiers: int):
            if not engine.handle_input(mapper.translate_key(symbol)):
                self.close()

    window = GameWindow()
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        try:
            window.close()
        except Exception:
            logger.debug("Window already closed")


def run_headless(
    keys: Iterable[str],
    engine: Optional[GameEngine] = None,
    mapper: Optional[InputMapper] = None,
) -> int:
    """Feed a scripted sequence of key names to the engine and print the last frame.

    Unbound key names are passed through as unrecognized input. Stops early on
    a quit key.
    """
    engine = engine or GameEngine()
    mapper = mapper or InputMapper.default()

    steps = 0
    try:
        for key in keys:
            steps += 1
            if not engine.handle_input(mapper.translate_key(key)):
                logger.info("Quit after %d inputs", steps)
                break
    except Exception:
        logger.exception("Unhandled exception in headless run")
        return 1

    print(engine.render())
    print(f"Inputs: {steps} | Score: {engine.score} | Game over: {engine.game_over}")
    return 0


def run_auto(
    engine: Optional[GameEngine] = None,
    mapper: Optional[InputMapper] = None,
    keys: Optional[Iterable[str]] = None,
) -> int:
    """Pick a driver from the environment.

    Honors environment overrides:
      - GRIDRUSH_HEADLESS=1 forces headless (reads keys, defaults to none).
      - GRIDRUSH_GUI=1 forces the Arcade window (if arcade importable).
    Otherwise the terminal driver is used.
    """
    if os.getenv("GRIDRUSH_HEADLESS") == "1" or keys is not None:
        return run_headless(keys or [], engine, mapper)

    if os.getenv("GRIDRUSH_GUI") == "1":
        return run_gui(engine, mapper)

    return run_terminal(engine, mapper)
