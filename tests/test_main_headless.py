from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

import gridrush.__main__ as cli
from gridrush.__main__ import main
from gridrush.app import run_headless
from gridrush.config import FieldConfig
from gridrush.engine import GameEngine
from gridrush.field import Cell

SRC = Path(__file__).resolve().parents[1] / "src"


def test_headless_entrypoint_exits_successfully():
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(SRC), env.get("PYTHONPATH")) if p)
    cmd = [sys.executable, "-m", "gridrush", "--headless", "--seed", "3", "--keys", "right,down,down"]
    proc = subprocess.run(cmd, capture_output=True, text=True, env=env, timeout=20)

    assert proc.returncode == 0, proc.stderr
    assert "Inputs: 3 |" in proc.stdout
    assert proc.stdout.startswith("+" + "-" * 60 + "+") or "Game Over" in proc.stdout


def test_main_headless_prints_frame(capsys):
    assert main(["--headless", "--seed", "1", "--keys", "up,left"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0] == "+" + "-" * 60 + "+"
    assert lines[1].startswith("|0")
    assert "Inputs: 2 | Score: 0 | Game over: False" in out


def test_main_rejects_bad_settings(tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("- nope\n", encoding="utf-8")
    assert main(["--headless", "--settings", str(bad)]) == 1
    assert "Invalid settings" in capsys.readouterr().err


def test_headless_quit_key_stops_early(capsys):
    engine = GameEngine(FieldConfig(width=10, height=10), seed=5)
    assert run_headless(["q", "down", "down"], engine) == 0
    assert engine.player_pos == (1, 1)
    assert "Inputs: 1 |" in capsys.readouterr().out


def test_headless_unbound_keys_are_ignored(capsys):
    engine = GameEngine(FieldConfig(width=10, height=10), seed=5)
    before = engine.field.to_lines()
    assert run_headless(["F13", "space"], engine) == 0
    assert engine.field.to_lines() == before


def test_headless_confirm_restarts_after_game_over(capsys):
    engine = GameEngine(FieldConfig(width=10, height=10), seed=5)
    engine.field.set(2, 1, Cell.ENEMY)
    run_headless(["down"], engine)
    assert engine.game_over is True
    assert "You died, Game Over!" in capsys.readouterr().out

    run_headless(["enter"], engine)
    assert engine.game_over is False
    assert engine.field.count(Cell.ENEMY) == 0


def test_curses_key_names():
    curses = pytest.importorskip("curses")
    from gridrush.app import curses_key_name

    assert curses_key_name(curses.KEY_UP) == "UP"
    assert curses_key_name(curses.KEY_LEFT) == "LEFT"
    assert curses_key_name(10) == "ENTER"
    assert curses_key_name(27) == "ESCAPE"
    assert curses_key_name(ord("q")) == "q"
    assert curses_key_name(-1) is None


def _capture_log_target(monkeypatch) -> dict:
    seen = {}
    monkeypatch.delenv("GRIDRUSH_HEADLESS", raising=False)
    monkeypatch.delenv("GRIDRUSH_GUI", raising=False)
    monkeypatch.setattr(cli, "_setup_logging", lambda verbosity, log_file=None: seen.update(log_file=log_file))
    monkeypatch.setattr(cli, "run_auto", lambda engine, mapper, keys: 0)
    monkeypatch.setattr(cli, "run_gui", lambda engine, mapper: 0)
    return seen


def test_terminal_driver_logs_to_file_by_default(monkeypatch):
    seen = _capture_log_target(monkeypatch)
    assert main(["-v"]) == 0
    assert seen["log_file"] == cli.DEFAULT_TERMINAL_LOG_FILE


def test_explicit_log_file_wins_over_terminal_default(monkeypatch, tmp_path):
    seen = _capture_log_target(monkeypatch)
    target = tmp_path / "run.log"
    assert main(["-v", "--log-file", str(target)]) == 0
    assert seen["log_file"] == target


@pytest.mark.parametrize("argv, env", [
    (["--headless"], {}),
    (["--gui"], {}),
    (["--keys", "right"], {}),
    ([], {"GRIDRUSH_HEADLESS": "1"}),
    ([], {"GRIDRUSH_GUI": "1"}),
])
def test_non_terminal_drivers_keep_logging_on_stderr(monkeypatch, capsys, argv, env):
    seen = _capture_log_target(monkeypatch)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    assert main(argv) == 0
    assert seen["log_file"] is None
