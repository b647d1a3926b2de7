from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional

from .actions import InputAction

logger = logging.getLogger(__name__)


class InputMapper:
    """Translates key names from any driver into :class:`InputAction` values.

    Lookups ignore case and surrounding whitespace, so the curses driver can
    pass ``"q"`` and the settings file can say ``Q``. Backend key codes that
    have no readable name (Arcade symbols) are registered as aliases of a
    canonical name.

        mapper = InputMapper.default()
        mapper.translate_key("w")   # -> InputAction.MOVE_UP
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, InputAction] = {}
        self._aliases: Dict[str, str] = {}

    @staticmethod
    def _normalize(key: str | int | None) -> Optional[str]:
        if isinstance(key, int):
            return str(key)
        if not isinstance(key, str) or not key.strip():
            return None
        return key.strip().upper()

    def bind(self, keys: Iterable[str | int], action: InputAction) -> None:
        """Bind every key in *keys* to *action*, replacing earlier bindings."""
        for key in keys:
            name = self._normalize(key)
            if name is None:
                logger.warning("Attempted to bind invalid key: %r", key)
                continue
            self._bindings[name] = action

    def unbind_action(self, action: InputAction) -> None:
        """Remove every key currently bound to *action*."""
        for key in self.keys_for(action):
            del self._bindings[key]

    def set_alias(self, physical: str | int, canonical_name: str) -> None:
        """Make *physical* (e.g. an Arcade key symbol) behave like *canonical_name*."""
        source = self._normalize(physical)
        target = self._normalize(canonical_name)
        if source and target:
            self._aliases[source] = target

    def keys_for(self, action: InputAction) -> list[str]:
        return sorted(k for k, a in self._bindings.items() if a is action)

    def translate_key(self, key: str | int | None) -> Optional[InputAction]:
        """Return the action bound to *key*, or None for unbound keys."""
        name = self._normalize(key)
        if name is None:
            return None
        return self._bindings.get(self._aliases.get(name, name))

    @classmethod
    def default(cls) -> "InputMapper":
        """Arrows and WASD move, Enter confirms, q / Ctrl+C / Escape quit."""
        mapper = cls()
        mapper.bind(["UP", "W"], InputAction.MOVE_UP)
        mapper.bind(["DOWN", "S"], InputAction.MOVE_DOWN)
        mapper.bind(["LEFT", "A"], InputAction.MOVE_LEFT)
        mapper.bind(["RIGHT", "D"], InputAction.MOVE_RIGHT)
        mapper.bind(["ENTER", "RETURN"], InputAction.CONFIRM)
        mapper.bind(["Q", "CTRL+C", "ESCAPE"], InputAction.QUIT)
        mapper.set_alias("ESC", "ESCAPE")
        return mapper

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> "InputMapper":
        """Build a mapper from ``{action name: [keys...]}`` on top of the defaults.

        An action listed in *mapping* loses its default keys and gets exactly
        the keys given. Unknown action names are logged and skipped.
        """
        mapper = cls.default()
        for name, keys in mapping.items():
            try:
                action = InputAction[str(name).strip().upper()]
            except KeyError:
                logger.warning("Ignoring bindings for unknown action: %r", name)
                continue
            if isinstance(keys, str):
                keys = [keys]
            mapper.unbind_action(action)
            mapper.bind(keys, action)
            logger.debug("Bound %s to %s", action.name, mapper.keys_for(action))
        return mapper


__all__ = ["InputMapper"]
