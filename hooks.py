"""
Named extension points.

Filters receive a value and return a (possibly modified) replacement; every
registered filter runs before the value reaches the caller. Actions are
notifications whose return values are ignored.

Usage:
    hooks = HookRegistry()
    hooks.add_filter("settings/fields", add_my_field)
    fields = hooks.apply_filters("settings/fields", fields)

    hooks.add_action("admin/settings/settings_saved", clear_cache)
    hooks.do_action("admin/settings/settings_saved", submitted)

Callbacks run in ascending priority; equal priorities keep registration order.
"""
import logging
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


class HookRegistry:
    def __init__(self):
        self._filters: Dict[str, List[Tuple[int, int, Callable]]] = {}
        self._actions: Dict[str, List[Tuple[int, int, Callable]]] = {}
        self._counter = 0

    def _register(self, table: dict, name: str, callback: Callable, priority: int):
        self._counter += 1
        table.setdefault(name, []).append((priority, self._counter, callback))
        table[name].sort(key=lambda entry: (entry[0], entry[1]))

    def add_filter(self, name: str, callback: Callable, priority: int = DEFAULT_PRIORITY):
        self._register(self._filters, name, callback, priority)

    def remove_filter(self, name: str, callback: Callable) -> bool:
        entries = self._filters.get(name, [])
        kept = [e for e in entries if e[2] is not callback]
        if len(kept) == len(entries):
            return False
        self._filters[name] = kept
        return True

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        for _, _, callback in list(self._filters.get(name, [])):
            value = callback(value, *args)
        return value

    def add_action(self, name: str, callback: Callable, priority: int = DEFAULT_PRIORITY):
        self._register(self._actions, name, callback, priority)

    def do_action(self, name: str, *args: Any) -> None:
        callbacks = list(self._actions.get(name, []))
        logger.debug("Firing action %s (%d callbacks)", name, len(callbacks))
        for _, _, callback in callbacks:
            callback(*args)
