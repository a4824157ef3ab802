from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .catalog import Catalog
from .focus import Direction, FocusNavigator
from .logger import get_logger
from .models import Distro, Family, FocusState, FocusType, Helper, HelperPolicy
from .script import JoinPolicy, Output, generate
from .search import filter_apps
from .selection import SelectionStore

log = get_logger("session")

Listener = Callable[[str, Dict[str, Any]], None]

class Session:
    """
    One user's working state: active distro, selection, helper policy and
    focus. Every input event maps to exactly one method here; the install
    command and script are derived on read.
    """

    def __init__(
        self,
        catalog: Catalog,
        distro_id: Optional[str] = None,
        wrap: bool = False,
        expanded: bool = False,
        join_policies: Optional[Mapping[Family, JoinPolicy]] = None,
    ):
        self.catalog = catalog
        self.selection = SelectionStore(catalog.app_ids())
        self.focus = FocusNavigator(catalog, wrap=wrap, expanded=expanded)
        self.policy = HelperPolicy()
        self.join_policies: Dict[Family, JoinPolicy] = dict(join_policies or {})
        self.search_query = ""
        if distro_id and catalog.distro(distro_id):
            self.distro_id = distro_id
        else:
            self.distro_id = catalog.distros[0].id if catalog.distros else ""
        self._listeners: List[Listener] = []
        self._memo: Optional[Tuple[Any, Output]] = None
        self.selection.on_clear(lambda: self.emit("selection_cleared"))

    # ---------- hooks ----------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def emit(self, event: str, **payload: Any) -> None:
        for cb in list(self._listeners):
            try:
                cb(event, payload)
            except Exception:
                log.exception("listener failed on %s", event)

    # ---------- distro / helper ----------
    @property
    def distro(self) -> Optional[Distro]:
        return self.catalog.distro(self.distro_id)

    def set_distro(self, distro_id: str) -> bool:
        if self.catalog.distro(distro_id) is None:
            return False
        if distro_id != self.distro_id:
            log.debug("distro %s -> %s", self.distro_id, distro_id)
            self.distro_id = distro_id
            self.emit("distro_changed", distro=distro_id)
        return True

    def cycle_distro(self, step: int) -> bool:
        ids = [d.id for d in self.catalog.distros]
        if not ids:
            return False
        idx = ids.index(self.distro_id) if self.distro_id in ids else 0
        idx = max(0, min(len(ids) - 1, idx + step))
        return self.set_distro(ids[idx])

    def set_helper(self, helper: Helper) -> None:
        if helper is not self.policy.selected_helper:
            self.policy = HelperPolicy(self.policy.has_helper_installed, helper)
            self.emit("helper_changed", helper=helper.value)

    def helper_shortcut(self, helper: Helper) -> bool:
        """Keyboard helper switch: only while the AUR settings are on screen."""
        if not self.show_aur_ui:
            return False
        self.set_helper(helper)
        return True

    def set_has_helper_installed(self, value: bool) -> None:
        self.policy = HelperPolicy(bool(value), self.policy.selected_helper)

    # ---------- selection ----------
    def toggle(self, app_id: str) -> bool:
        if not self.catalog.has_app(app_id):
            return False
        on = self.selection.toggle(app_id)
        self.emit("app_toggled", app=app_id, selected=on)
        return on

    def clear_selection(self) -> None:
        self.selection.clear()

    @property
    def selected_count(self) -> int:
        return self.selection.count()

    def is_available(self, app_id: str) -> bool:
        return self.catalog.is_available(app_id, self.distro_id)

    # ---------- focus ----------
    @property
    def focus_state(self) -> FocusState:
        return self.focus.state

    def navigate(self, direction: Direction) -> FocusState:
        return self.focus.navigate(direction)

    def activate(self) -> None:
        s = self.focus.state
        if s.focused_type is FocusType.CATEGORY:
            was = self.focus.is_expanded(s.focused_id)
            self.focus.activate()
            self._expansion_event(s.focused_id, was)
            return
        app_id = self.focus.activate()
        if app_id is not None:
            self.toggle(app_id)

    def toggle_category(self, category: str) -> None:
        if self.catalog.category(category) is None:
            return
        was = self.focus.is_expanded(category)
        self.focus.toggle_expanded(category)
        self._expansion_event(category, was)

    def _expansion_event(self, category: str, was: bool) -> None:
        now = self.focus.is_expanded(category)
        if now != was:
            self.emit("category_expanded" if now else "category_collapsed", category=category)

    def clear_focus(self) -> None:
        self.focus.clear()

    def set_search(self, query: str) -> None:
        self.search_query = query or ""
        self.focus.set_filter(filter_apps(self.catalog, self.search_query))

    # ---------- derived output ----------
    def output(self) -> Output:
        key = (
            self.distro_id,
            self.selection.selected_ids(),
            self.policy,
            tuple(sorted((f.value, j.value) for f, j in self.join_policies.items())),
        )
        if self._memo is None or self._memo[0] != key:
            self._memo = (key, generate(self.catalog, self.distro_id, key[1], self.policy, self.join_policies))
        return self._memo[1]

    @property
    def command(self) -> str:
        return self.output().command

    @property
    def script(self) -> str:
        return self.output().script

    @property
    def has_aur_packages(self) -> bool:
        return self.output().has_aur_packages

    @property
    def show_aur_ui(self) -> bool:
        return self.output().show_aur_ui

    @property
    def aur_app_names(self) -> Tuple[str, ...]:
        return self.output().aur_app_names

    def mark_copied(self) -> None:
        self.emit("command_copied", distro=self.distro_id, count=self.selected_count)

    def mark_downloaded(self) -> None:
        self.emit("script_downloaded", distro=self.distro_id, count=self.selected_count)
