"""Key-combo dispatch table used by the navigator's mode handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Exact-match key dispatch; the first registration of a combo wins."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register(self, *combos: str, handler: Callable[[], bool | None]) -> KeyComboRegistry:
        """Bind ``handler`` to every token in ``combos`` and return ``self``."""
        return self.register_binding(KeyComboBinding(combos=combos, handler=handler))

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        for combo in binding.combos:
            self._handlers.setdefault(combo, binding.handler)
        return self

    def handles(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool | None:
        """Invoke the handler bound to ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


__all__ = [
    "KeyComboBinding",
    "KeyComboRegistry",
]
