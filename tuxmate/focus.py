"""
Keyboard focus over the category/app list.

The visible order is every category header followed, when the category is
expanded, by its visible apps. An app can only hold focus while its category
is expanded; every transition below keeps it that way.
"""
from __future__ import annotations

from enum import Enum
from typing import Collection, Dict, List, Optional, Set, Tuple

from .catalog import Catalog
from .logger import get_logger
from .models import FocusState, FocusType

log = get_logger("focus")

IDLE = FocusState()

class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

Item = Tuple[FocusType, str]

class FocusNavigator:
    def __init__(self, catalog: Catalog, wrap: bool = False, expanded: bool = False):
        self.catalog = catalog
        self.wrap = wrap
        self._state = IDLE
        self._expanded: Dict[str, bool] = {c.name: expanded for c in catalog.categories}
        self._owner: Dict[str, str] = {a: c.name for c in catalog.categories for a in c.app_ids}
        self._visible: Optional[Set[str]] = None

    # ---------- snapshots ----------
    @property
    def state(self) -> FocusState:
        return self._state

    def is_expanded(self, category: str) -> bool:
        return self._expanded.get(category, False)

    def is_visible(self, app_id: str) -> bool:
        return self._visible is None or app_id in self._visible

    def visible_apps(self, category: str) -> List[str]:
        c = self.catalog.category(category)
        if c is None:
            return []
        return [a for a in c.app_ids if self.is_visible(a)]

    def items(self) -> List[Item]:
        out: List[Item] = []
        for c in self.catalog.categories:
            out.append((FocusType.CATEGORY, c.name))
            if self._expanded[c.name]:
                out.extend((FocusType.APP, a) for a in self.visible_apps(c.name))
        return out

    def invariant_holds(self) -> bool:
        s = self._state
        if s.focused_type is FocusType.APP:
            owner = self._owner.get(s.focused_id or "")
            return owner is not None and self._expanded[owner] and self.is_visible(s.focused_id)
        return True

    # ---------- transitions ----------
    def _set(self, state: FocusState) -> FocusState:
        if state != self._state:
            log.debug("focus %s -> %s", _fmt(self._state), _fmt(state))
        self._state = state
        return state

    def _step(self, idx: int, delta: int, n: int) -> int:
        if self.wrap:
            return (idx + delta) % n
        return max(0, min(n - 1, idx + delta))

    def navigate(self, direction: Direction) -> FocusState:
        cats = self.catalog.categories
        if not cats:
            return self._state
        if self._state.idle:
            return self._set(FocusState(cats[0].name, FocusType.CATEGORY))

        if direction in (Direction.UP, Direction.DOWN):
            items = self.items()
            cur = (self._state.focused_type, self._state.focused_id)
            idx = items.index(cur) if cur in items else 0
            kind, target = items[self._step(idx, 1 if direction is Direction.DOWN else -1, len(items))]
            return self._set(FocusState(target, kind))

        names = [c.name for c in cats]
        if self._state.focused_type is FocusType.APP:
            here = self._owner[self._state.focused_id]
        else:
            here = self._state.focused_id
        idx = names.index(here)
        nxt = self._step(idx, 1 if direction is Direction.RIGHT else -1, len(names))
        return self._set(FocusState(names[nxt], FocusType.CATEGORY))

    def activate(self) -> Optional[str]:
        """
        On a category: expand/collapse it, entering its first app on expansion.
        On an app: focus stays, the app id is returned for the caller to toggle.
        """
        s = self._state
        if s.focused_type is FocusType.APP:
            return s.focused_id
        if s.focused_type is FocusType.CATEGORY:
            if self.toggle_expanded(s.focused_id):
                apps = self.visible_apps(s.focused_id)
                if apps:
                    self._set(FocusState(apps[0], FocusType.APP))
        return None

    def set_expanded(self, category: str, value: bool) -> bool:
        if category not in self._expanded:
            return False
        self._expanded[category] = value
        s = self._state
        if not value and s.focused_type is FocusType.APP and self._owner.get(s.focused_id) == category:
            self._set(FocusState(category, FocusType.CATEGORY))
        return value

    def toggle_expanded(self, category: str) -> bool:
        if category not in self._expanded:
            return False
        return self.set_expanded(category, not self._expanded[category])

    def focus_category(self, category: str) -> FocusState:
        if category not in self._expanded:
            return self._state
        return self._set(FocusState(category, FocusType.CATEGORY))

    def focus_app(self, app_id: str) -> FocusState:
        owner = self._owner.get(app_id)
        if owner is None or not self.is_visible(app_id):
            return self._state
        self._expanded[owner] = True
        return self._set(FocusState(app_id, FocusType.APP))

    def clear(self) -> FocusState:
        return self._set(IDLE)

    def set_filter(self, visible: Optional[Collection[str]]) -> None:
        self._visible = set(visible) if visible is not None else None
        s = self._state
        if s.focused_type is FocusType.APP and not self.is_visible(s.focused_id):
            self._set(FocusState(self._owner[s.focused_id], FocusType.CATEGORY))

def _fmt(s: FocusState) -> str:
    return "idle" if s.idle else f"{s.focused_type.value}:{s.focused_id}"
