from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .app import run_auto, run_gui, run_headless
from .engine import GameEngine
from .exceptions import SettingsError
from .settings import Settings

# Where logs go when the curses screen owns the terminal and no --log-file is given
DEFAULT_TERMINAL_LOG_FILE = Path("gridrush.log")


def _setup_logging(verbosity: int, log_file: Optional[Path] = None) -> None:
    level = logging.WARNING
    level_name = os.getenv("GRIDRUSH_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handlers = None
    if log_file:
        # delay so a quiet run leaves no empty file behind
        handlers = [logging.FileHandler(log_file, encoding="utf-8", delay=True)]
    logging.basicConfig(
        level=level,
        handlers=handlers,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def _split_keys(raw: str) -> list[str]:
    return [k for k in (part.strip() for part in raw.split(",")) if k]


def _uses_terminal(args: argparse.Namespace, keys: Optional[list[str]]) -> bool:
    """Mirror the driver choice of `run_auto` for the given command line."""
    if args.headless or args.gui or keys is not None:
        return False
    return os.getenv("GRIDRUSH_HEADLESS") != "1" and os.getenv("GRIDRUSH_GUI") != "1"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gridrush",
        description="Grid Rush - collect the $ and dodge the X",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Play in an Arcade window")
    mode.add_argument("--headless", action="store_true", help="Replay --keys without a screen and print the last frame")
    parser.add_argument("--keys", default=None, help="Comma separated key names for headless mode, e.g. 'right,down,q'")
    parser.add_argument("--seed", type=int, default=None, help="Seed the random number generator")
    parser.add_argument("--settings", dest="settings_path", type=Path, default=None, help="YAML file with key binding overrides")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file (default: stderr, or gridrush.log for the terminal driver)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    keys = _split_keys(args.keys) if args.keys is not None else None
    log_file = args.log_file
    if log_file is None and _uses_terminal(args, keys):
        log_file = DEFAULT_TERMINAL_LOG_FILE
    _setup_logging(args.verbose, log_file)

    try:
        settings = Settings.load(user_path=args.settings_path)
    except SettingsError as ex:
        print(f"Invalid settings: {ex}", file=sys.stderr)
        return 1

    engine = GameEngine(seed=args.seed)
    mapper = settings.build_mapper()

    if args.headless:
        return run_headless(keys or [], engine, mapper)

    if args.gui:
        return run_gui(engine, mapper)

    return run_auto(engine, mapper, keys)


if __name__ == "__main__":
    sys.exit(main())
