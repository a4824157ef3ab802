from __future__ import annotations
from rich.markup import escape
from textual.containers import Container, Horizontal
from textual.widgets import Button, DataTable, Input, Static

from ..models import FocusType, Mechanism

PLACEHOLDER = "# select apps to generate the install command"
KEYS = "↑↓←→/hjkl Move · Space Toggle · y Copy · d Download · c Clear · / Search · [ ] Distro · Tab Script"

class CatalogTable(DataTable, can_focus=False):
    """The cursor follows the session focus, never its own key bindings."""

def build(app, pane):
    pane.mount(Static("", id="apps_card", classes="topcard"))
    pane.mount(Input(placeholder="search apps…", id="search_input"))

    row = Horizontal(id="apps_row")
    pane.mount(row)

    tbl = CatalogTable(id="catalog_tbl")
    app.safe_cursor_row(tbl)
    tbl.add_columns("Sel", "App", "Package", "Src")

    row.mount(Container(tbl, id="apps_list"))
    row.mount(Static("", id="app_info", classes="infobox"))

    pane.mount(Static(PLACEHOLDER, id="cmd_preview", markup=False))
    pane.mount(
        Horizontal(
            Button("Copy (y)", id="btn_copy", variant="success"),
            Button("Download (d)", id="btn_download", variant="primary"),
            Button("Clear (c)", id="btn_clear", variant="warning"),
            classes="toolbar",
        )
    )
    refresh(app)

def refresh(app):
    s = app.session
    d = s.distro
    title = escape(d.name) if d else "(no distros in catalog)"
    tagline = escape(str(app.catalog.ui.get("tagline", "")))
    app.query_one("#apps_card", Static).update(
        f"[b]{title}[/b]\n[dim]{tagline}[/dim]\n[dim]{KEYS}[/dim]"
    )
    _populate(app)
    _info(app)
    app.query_one("#cmd_preview", Static).update(s.command or PLACEHOLDER)

def _populate(app):
    s = app.session
    cat = app.catalog
    tbl = app.query_one("#catalog_tbl", DataTable)
    tbl.clear()

    items = s.focus.items()
    if not items:
        tbl.add_row("", "(no categories in catalog)", "", "")
    for kind, ident in items:
        if kind is FocusType.CATEGORY:
            arrow = "▾" if s.focus.is_expanded(ident) else "▸"
            n_sel = sum(1 for a in cat.category(ident).app_ids if s.selection.has(a))
            n_vis = len(s.focus.visible_apps(ident))
            tbl.add_row(arrow, escape(ident), f"[dim]{n_vis} apps[/dim]", f"{n_sel} sel" if n_sel else "", key=f"cat:{ident}")
            continue
        a = cat.app(ident)
        spec = cat.install_spec(ident, s.distro_id)
        sel = "✔" if s.selection.has(ident) else ""
        if spec is None:
            pkg, src = "[dim]not available[/dim]", ""
        elif spec.mechanism is Mechanism.MANUAL:
            pkg, src = "[dim]manual install[/dim]", "manual"
        else:
            pkg, src = escape(" ".join(spec.packages)[:40]), spec.mechanism.value
        tbl.add_row(sel, "  " + escape(a.name), pkg, src, key=f"app:{ident}")

    st = s.focus_state
    tbl.show_cursor = not st.idle
    if not st.idle:
        cur = (st.focused_type, st.focused_id)
        if cur in items:
            try:
                tbl.move_cursor(row=items.index(cur), column=0)
            except Exception:
                pass

def _info(app):
    s = app.session
    cat = app.catalog
    box = app.query_one("#app_info", Static)
    st = s.focus_state
    if st.idle:
        box.update("[b]Info[/b]\n\n↓ or j to start · Space expands a category or toggles an app")
        return
    if st.focused_type is FocusType.CATEGORY:
        c = cat.category(st.focused_id)
        n_sel = sum(1 for a in c.app_ids if s.selection.has(a))
        n_here = sum(1 for a in c.app_ids if s.is_available(a))
        state = "expanded" if s.focus.is_expanded(c.name) else "collapsed"
        box.update(
            f"[b]{escape(c.name)}[/b]\n[dim]{state}[/dim]\n\n"
            f"Apps: {len(c.app_ids)} ({n_here} on {escape(app.distro_name)})\nSelected: {n_sel}"
        )
        return
    a = cat.app(st.focused_id)
    spec = cat.install_spec(a.id, s.distro_id)
    if spec is None:
        how = f"not packaged for {app.distro_name}"
    elif spec.mechanism is Mechanism.MANUAL:
        how = f"manual: {spec.note}"
    else:
        how = f"{spec.mechanism.value}: {' '.join(spec.packages)}"
    where = ", ".join(d.name for d in cat.distros if d.id in a.targets) or "-"
    box.update(
        f"[b]{escape(a.name)}[/b] {'✔' if s.selection.has(a.id) else ''}\n{escape(a.desc)}\n\n"
        f"[dim]Install:[/dim] {escape(how)}\n[dim]Available on:[/dim] {escape(where)}"
    )

def focus_input(app):
    try:
        app.query_one("#search_input", Input).focus()
    except Exception:
        pass

def on_input_changed(app, event) -> bool:
    if getattr(event.input, "id", "") != "search_input":
        return False
    app.session.set_search(event.value)
    _populate(app)
    _info(app)
    return True

def on_row_selected(app, event, table_id: str) -> bool:
    if table_id != "catalog_tbl":
        return False
    kind, _, ident = str(event.row_key.value or "").partition(":")
    s = app.session
    if kind == "cat":
        s.focus.focus_category(ident)
    elif kind == "app":
        s.focus.focus_app(ident)
    else:
        return True
    s.activate()
    app.refresh_views()
    return True

async def on_button(app, bid: str) -> bool:
    if bid == "btn_copy":
        app.action_copy()
        return True
    if bid == "btn_download":
        app.action_download()
        return True
    if bid == "btn_clear":
        app.action_clear()
        return True
    return False
