from __future__ import annotations

from rich.markup import escape
from textual.containers import Horizontal
from textual.widgets import Button, Static

from ..models import Helper

def build(app, pane):
    app.mount_topcard(
        pane,
        "AUR",
        "Helper settings for AUR packages on Arch-family distros",
        "1 yay · 2 paru (while AUR packages are selected)",
    )
    pane.mount(
        Horizontal(
            Button("Install helper first", id="btn_aur_bootstrap", variant="warning"),
            Button("I have one", id="btn_aur_have", variant="primary"),
            Button("yay", id="btn_aur_yay", variant="success"),
            Button("paru", id="btn_aur_paru", variant="success"),
            classes="toolbar",
        )
    )
    pane.mount(Static("", id="aur_info", classes="infobox"))
    refresh(app)

def refresh(app):
    s = app.session
    box = app.query_one("#aur_info", Static)
    if not s.show_aur_ui:
        box.update("No AUR packages selected.\n\n[dim]Only apps packaged in the AUR on an Arch-family distro need a helper.[/dim]")
        return
    p = s.policy
    logic = "script uses your existing helper" if p.has_helper_installed else "script installs the helper first"
    body = (
        f"[b]AUR packages[/b] ({len(s.aur_app_names)}):\n  " + escape(", ".join(s.aur_app_names)) + "\n\n"
        f"[b]Installation logic[/b]: {logic}\n"
        f"[b]Preferred helper[/b]: {p.selected_helper.value}"
    )
    box.update(body)

async def on_button(app, bid: str) -> bool:
    s = app.session
    if bid == "btn_aur_bootstrap":
        s.set_has_helper_installed(False)
        app.set_last("AUR: install helper first")
    elif bid == "btn_aur_have":
        s.set_has_helper_installed(True)
        app.set_last("AUR: helper already installed")
    elif bid in ("btn_aur_yay", "btn_aur_paru"):
        helper = Helper.YAY if bid == "btn_aur_yay" else Helper.PARU
        s.set_helper(helper)
        app.set_last(f"AUR helper: {helper.value}")
    else:
        return False
    app.refresh_views()
    return True
