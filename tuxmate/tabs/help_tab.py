from __future__ import annotations
from textual.widgets import Markdown

def build(app, pane):
    app.mount_topcard(pane, "Help", "Keys & Workflow", "")
    pane.mount(Markdown(
        "## Keys\n"
        "- `↑ ↓ ← →` / `h j k l` Move between categories and apps\n"
        "- `Space` / `Enter` Expand a category · toggle an app\n"
        "- `[` `]` Previous / next distro\n"
        "- `/` Search, `Esc` leaves the search box\n"
        "- `y` Copy command · `d` Download script · `c` Clear selection\n"
        "- `1` `2` AUR helper yay / paru (Arch, AUR apps selected)\n"
        "- `Tab` Script preview · `F1..F4` Tabs\n"
        "\n"
        "## Workflow\n"
        "1. Pick a distro with `[` `]`.\n"
        "2. Select apps. Apps not packaged for the distro stay selected but are left out of the command.\n"
        "3. Copy the one-line command or download the script.\n"
    , classes="infobox"))
