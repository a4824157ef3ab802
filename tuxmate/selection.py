from __future__ import annotations
from typing import Callable, Collection, FrozenSet, List, Optional, Set

from .logger import get_logger

log = get_logger("selection")

class SelectionStore:
    """
    The set of chosen app ids.

    Bound to ``known`` ids, toggling anything else is ignored so stale ids
    never enter the selection. Availability on the active distro plays no
    part here.
    """

    def __init__(self, known: Optional[Collection[str]] = None):
        self._known: Optional[FrozenSet[str]] = frozenset(known) if known is not None else None
        self._ids: Set[str] = set()
        self._on_clear: List[Callable[[], None]] = []

    def toggle(self, app_id: str) -> bool:
        """Flip membership. Returns the new membership."""
        if self._known is not None and app_id not in self._known:
            return False
        if app_id in self._ids:
            self._ids.remove(app_id)
            log.debug("deselected %s", app_id)
            return False
        self._ids.add(app_id)
        log.debug("selected %s", app_id)
        return True

    def clear(self) -> None:
        n = len(self._ids)
        self._ids.clear()
        log.debug("cleared %d selected apps", n)
        for cb in list(self._on_clear):
            cb()

    def on_clear(self, cb: Callable[[], None]) -> None:
        self._on_clear.append(cb)

    def has(self, app_id: str) -> bool:
        return app_id in self._ids

    def count(self) -> int:
        return len(self._ids)

    def selected_ids(self) -> FrozenSet[str]:
        return frozenset(self._ids)

    def __contains__(self, app_id: str) -> bool:
        return app_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
