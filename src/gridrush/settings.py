from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .exceptions import SettingsError
from .input import InputMapper

logger = logging.getLogger(__name__)


@dataclass
class InputSettings:
    # action name -> key names; actions left out keep their default keys
    mapping: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class Settings:
    input: InputSettings = field(default_factory=InputSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as ex:
            raise SettingsError(f"Could not parse settings file {path}: {ex}") from ex
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping at top level")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        input_data = data.get("input") or {}
        if not isinstance(input_data, dict):
            raise SettingsError("input must be a mapping")
        mapping = input_data.get("mapping") or {}
        if not isinstance(mapping, dict):
            raise SettingsError("input.mapping must be a mapping of action name to keys")
        normalized: Dict[str, List[str]] = {}
        for action, keys in mapping.items():
            if isinstance(keys, (str, int)):
                keys = [keys]
            if not isinstance(keys, list):
                raise SettingsError(f"Keys for {action!r} must be a string or a list")
            normalized[str(action)] = [str(k) for k in keys]
        return Settings(input=InputSettings(mapping=normalized))

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from the built-in defaults and an optional user file.

        If user_path is provided and exists, its values are overlaid onto the
        defaults. A missing file is logged and ignored.
        """
        default_data = dataclasses.asdict(Settings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        data = {"input": {"mapping": {k: list(v) for k, v in self.input.mapping.items()}}}
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        logger.info("Saved settings to %s", path)

    def build_mapper(self) -> InputMapper:
        return InputMapper.from_mapping(self.input.mapping)
