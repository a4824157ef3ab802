from __future__ import annotations
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Static

def build(app, pane):
    app.mount_topcard(pane, "Script", "Full install script for the selected apps", "Tab back to Apps · d Download")
    pane.mount(VerticalScroll(Static("", id="script_text", markup=False), id="script_view"))
    pane.mount(
        Horizontal(
            Button("Download (d)", id="btn_script_download", variant="primary"),
            Button("Copy command (y)", id="btn_script_copy", variant="success"),
            classes="toolbar",
        )
    )
    refresh(app)

def refresh(app):
    s = app.session
    text = s.script
    if not text:
        d = s.distro
        if s.selected_count:
            text = f"# none of the {s.selected_count} selected apps is packaged for {d.name if d else '-'}"
        else:
            text = "# nothing selected yet"
    app.query_one("#script_text", Static).update(text)

async def on_button(app, bid: str) -> bool:
    if bid == "btn_script_download":
        app.action_download()
        return True
    if bid == "btn_script_copy":
        app.action_copy()
        return True
    return False
