from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from gridrush.exceptions import SettingsError
from gridrush.input import InputAction
from gridrush.settings import Settings


def test_defaults_without_user_file():
    settings = Settings.load()
    assert settings.input.mapping == {}
    mapper = settings.build_mapper()
    assert mapper.translate_key("UP") == InputAction.MOVE_UP


def test_missing_user_file_falls_back_to_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    settings = Settings.load(user_path=tmp_path / "nope.yaml")
    assert settings.input.mapping == {}
    assert "not found" in caplog.text


def test_user_file_overrides_bindings(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        textwrap.dedent(
            """
            input:
              mapping:
                move_left: [h]
                move_right: l
            """
        ),
        encoding="utf-8",
    )
    settings = Settings.load(user_path=path)
    assert settings.input.mapping == {"move_left": ["h"], "move_right": ["l"]}

    mapper = settings.build_mapper()
    assert mapper.translate_key("h") == InputAction.MOVE_LEFT
    assert mapper.translate_key("L") == InputAction.MOVE_RIGHT
    assert mapper.translate_key("LEFT") is None


def test_malformed_files_raise_settings_error(tmp_path: Path):
    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("input: [unclosed\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        Settings.load(user_path=bad_yaml)

    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        Settings.load(user_path=not_mapping)

    bad_keys = tmp_path / "keys.yaml"
    bad_keys.write_text("input:\n  mapping:\n    quit: {a: 1}\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        Settings.load(user_path=bad_keys)


def test_save_then_load(tmp_path: Path):
    settings = Settings.load()
    settings.input.mapping["confirm"] = ["SPACE"]
    path = tmp_path / "nested" / "settings.yaml"
    settings.save(path)

    loaded = Settings.load(user_path=path)
    assert loaded.input.mapping == {"confirm": ["SPACE"]}
    assert loaded.build_mapper().translate_key("space") == InputAction.CONFIRM
