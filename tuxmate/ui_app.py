from __future__ import annotations

import os
from typing import Any, Dict, Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Static, TabbedContent, TabPane

from .catalog import Catalog
from .focus import Direction
from .logger import get_logger
from .models import Helper
from .modals import ErrorModal, OverwriteScriptModal, ScriptSavedModal
from .session import Session
from .storage import EXPORTS_DIR, script_filename, write_script

from .tabs import apps_tab, script_tab, aur_tab, help_tab

log = get_logger("ui")

APP_NAME = "tuxmate"

class TuxmateApp(App):
    AUTO_FOCUS = None

    CSS = """
    Screen { background: $background; }
    Header { background: $panel; }
    Footer { background: $panel; }

    #statusbar { height: auto; border: round $primary; background: $boost; padding: 0 2; margin: 0 1 1 1; }

    #apps_row { height: 1fr; }
    #apps_list { width: 3fr; height: 1fr; }
    #app_info { width: 2fr; min-width: 32; height: 1fr; }
    #cmd_preview { height: auto; max-height: 6; border: round $success; background: $panel; padding: 0 2; margin: 0 1 1 1; }

    #script_view { height: 1fr; border: round $surface; background: $panel; padding: 0 1; margin: 0 1 1 1; overflow: auto; }

    .topcard { height: auto; border: round $primary; background: $panel; padding: 1 2; margin: 0 1 1 1; }
    .infobox { border: round $primary; background: $boost; padding: 1 2; margin: 0 1 1 1; }
    .toolbar { height: auto; padding: 0 1; margin: 0 1 1 1; }
    .toolbar Button { margin: 0 1 0 0; }

    DataTable { height: 1fr; border: round $surface; background: $panel; margin: 0 1 1 1; }
    Input { border: round $surface; background: $panel; margin: 0 1 1 1; }

    #modal { width: 80%; max-width: 120; height: auto; padding: 1 2; border: round $primary; background: $panel; }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("f1", "go_help", "Help"),
        ("f2", "go_apps", "Apps"),
        ("f3", "go_script", "Script"),
        ("f4", "go_aur", "AUR"),
        Binding("tab", "toggle_preview", "Preview", priority=True),
        ("up", "nav('up')", "Up"),
        ("down", "nav('down')", "Down"),
        ("left", "nav('left')", "Left"),
        ("right", "nav('right')", "Right"),
        Binding("k", "nav('up')", "Up", show=False),
        Binding("j", "nav('down')", "Down", show=False),
        Binding("h", "nav('left')", "Left", show=False),
        Binding("l", "nav('right')", "Right", show=False),
        ("space", "activate", "Toggle"),
        Binding("enter", "activate", "Toggle", show=False),
        ("y", "copy", "Copy"),
        ("d", "download", "Download"),
        ("c", "clear", "Clear"),
        ("/", "focus_search", "Search"),
        ("escape", "unfocus", "Unfocus"),
        ("[", "distro_prev", "Distro prev"),
        ("]", "distro_next", "Distro next"),
        Binding("1", "helper('yay')", "yay", show=False),
        Binding("2", "helper('paru')", "paru", show=False),
    ]

    def __init__(self, catalog: Catalog, distro_id: Optional[str] = None, export_dir: Optional[str] = None, wrap: bool = False, session: Optional[Session] = None):
        super().__init__()
        self.catalog = catalog
        self.session = session or Session(catalog, distro_id=distro_id, wrap=wrap)
        self.export_dir = export_dir or EXPORTS_DIR
        self.last_action = "Ready."
        self.aur_prompted = False
        self.session.subscribe(self.on_session_event)

    # ---------- session events ----------
    def on_session_event(self, event: str, payload: Dict[str, Any]) -> None:
        log.debug("event %s %s", event, payload)
        if event == "selection_cleared":
            # a fresh AUR selection should prompt again
            self.aur_prompted = False
        elif event == "app_toggled" and self.session.show_aur_ui and not self.aur_prompted:
            self.aur_prompted = True
            names = escape(", ".join(self.session.aur_app_names))
            self.notify(
                f"AUR packages: {names}\n1 = yay · 2 = paru · F4 to say a helper is already installed",
                title="AUR helper",
            )

    # ---------- basics ----------
    @property
    def distro_name(self) -> str:
        d = self.session.distro
        return d.name if d else "-"

    def set_last(self, msg: str) -> None:
        self.last_action = msg
        self.update_status()

    def update_status(self) -> None:
        s = self.session
        out = s.output()
        if s.show_aur_ui:
            mode = "use installed" if s.policy.has_helper_installed else "bootstrap"
            aur = f"{s.policy.selected_helper.value} ({mode}), {len(out.aur_app_names)} pkg"
        else:
            aur = "-"
        text = (
            f"Distro: {self.distro_name}   "
            f"Selected: {s.selected_count} ({len(out.included)} here)   "
            f"AUR: {aur}   "
            f"Last: {self.last_action}"
        )
        try:
            self.query_one("#statusbar", Static).update(text)
        except Exception:
            pass

    def mount_topcard(self, pane: TabPane, title: str, subtitle: str = "", keys: str = "") -> None:
        lines = [f"[b]{title}[/b]"]
        if subtitle:
            lines.append(f"[dim]{subtitle}[/dim]")
        if keys:
            lines.append(f"[dim]{keys}[/dim]")
        pane.mount(Static("\n".join(lines), classes="topcard"))

    @staticmethod
    def safe_cursor_row(tbl: DataTable) -> None:
        try:
            tbl.cursor_type = "row"  # type: ignore[attr-defined]
        except Exception:
            pass

    # ---------- app layout ----------
    def compose(self) -> ComposeResult:
        yield Header(show_clock=False, name=str(self.catalog.ui.get("title", APP_NAME)))
        yield Static("", id="statusbar", markup=False)
        with TabbedContent(id="tabs"):
            yield TabPane("Apps", id="tab_apps")
            yield TabPane("Script", id="tab_script")
            yield TabPane("AUR", id="tab_aur")
            yield TabPane("Help", id="tab_help")
        yield Footer()

    def on_mount(self) -> None:
        self.title = str(self.catalog.ui.get("title", APP_NAME))
        self.build_all()
        self.query_one("#tabs", TabbedContent).active = "tab_apps"
        self.update_status()

    def clear_pane(self, pane_id: str) -> TabPane:
        pane = self.query_one(f"#{pane_id}", TabPane)
        pane.remove_children()
        return pane

    def build_all(self) -> None:
        apps_tab.build(self, self.clear_pane("tab_apps"))
        script_tab.build(self, self.clear_pane("tab_script"))
        aur_tab.build(self, self.clear_pane("tab_aur"))
        help_tab.build(self, self.clear_pane("tab_help"))

    def refresh_views(self) -> None:
        apps_tab.refresh(self)
        script_tab.refresh(self)
        aur_tab.refresh(self)
        self.update_status()

    # ---------- navigation actions ----------
    def _go(self, tab_id: str) -> None:
        self.query_one("#tabs", TabbedContent).active = tab_id

    def action_go_help(self) -> None: self._go("tab_help")
    def action_go_apps(self) -> None: self._go("tab_apps")
    def action_go_script(self) -> None: self._go("tab_script")
    def action_go_aur(self) -> None: self._go("tab_aur")

    def action_toggle_preview(self) -> None:
        tabs = self.query_one("#tabs", TabbedContent)
        if tabs.active == "tab_script":
            tabs.active = "tab_apps"
        elif self.session.selected_count:
            tabs.active = "tab_script"

    def action_focus_search(self) -> None:
        self._go("tab_apps")
        apps_tab.focus_input(self)

    def action_unfocus(self) -> None:
        if self.focused is not None:
            self.set_focus(None)
        else:
            self.session.clear_focus()
            apps_tab.refresh(self)

    def action_nav(self, direction: str) -> None:
        self.session.navigate(Direction(direction))
        apps_tab.refresh(self)

    def action_activate(self) -> None:
        self.session.activate()
        self.refresh_views()

    def action_distro_prev(self) -> None:
        self._cycle_distro(-1)

    def action_distro_next(self) -> None:
        self._cycle_distro(1)

    def _cycle_distro(self, step: int) -> None:
        before = self.session.distro_id
        self.session.cycle_distro(step)
        if self.session.distro_id != before:
            self.refresh_views()
            self.set_last(f"Distro: {self.distro_name}")

    def action_helper(self, helper: str) -> None:
        if self.session.helper_shortcut(Helper(helper)):
            self.refresh_views()
            self.set_last(f"AUR helper: {helper}")

    # ---------- output actions ----------
    def action_copy(self) -> None:
        if not self.session.selected_count:
            return
        cmd = self.session.command
        if not cmd:
            self.set_last(f"Nothing installable on {self.distro_name}")
            return
        self.copy_to_clipboard(cmd)
        self.session.mark_copied()
        self.notify("Command copied to clipboard")
        self.set_last("Copied command")

    def action_download(self) -> None:
        if not self.session.selected_count:
            return
        text = self.session.script
        if not text:
            self.set_last(f"Nothing installable on {self.distro_name}")
            return
        path = os.path.join(self.export_dir, script_filename(self.session.distro_id))
        if not os.path.exists(path):
            self._save_script(self.session.distro_id, text)
            return

        distro_id = self.session.distro_id

        def _answer(replace: bool) -> None:
            if replace:
                self._save_script(distro_id, text)
            else:
                self.set_last("Download cancelled")

        self.push_screen(OverwriteScriptModal(path, self.distro_name), callback=_answer)

    def _save_script(self, distro_id: str, text: str) -> None:
        try:
            path = write_script(self.export_dir, distro_id, text)
        except OSError as e:
            log.error("writing script for %s failed: %s", distro_id, e)
            self.push_screen(ErrorModal("Download failed", str(e)))
            self.set_last("Download failed")
            return
        self.session.mark_downloaded()
        self.push_screen(ScriptSavedModal(path))
        self.set_last("Script saved")

    def action_clear(self) -> None:
        self.session.clear_selection()
        self.refresh_views()
        self.set_last("Selection cleared")

    # ---------- global dispatch ----------
    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        table_id = getattr(event.data_table, "id", "")
        if apps_tab.on_row_selected(self, event, table_id):
            return

    def on_input_changed(self, event) -> None:
        apps_tab.on_input_changed(self, event)

    def on_input_submitted(self, event) -> None:
        self.set_focus(None)

    async def on_button_pressed(self, event) -> None:
        bid = event.button.id
        # keep space/enter for the catalog, not the clicked button
        self.set_focus(None)
        if await apps_tab.on_button(self, bid): return
        if await script_tab.on_button(self, bid): return
        if await aur_tab.on_button(self, bid): return
