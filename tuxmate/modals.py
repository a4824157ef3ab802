from __future__ import annotations
import os

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static

class OverwriteScriptModal(ModalScreen[bool]):
    """Asks before an exported script replaces one from an earlier download."""

    BINDINGS = [
        ("y", "replace", "Replace"),
        ("n", "keep", "Keep"),
        ("escape", "keep", "Keep"),
    ]

    def __init__(self, path: str, distro_name: str):
        super().__init__()
        self.path = path
        self.distro_name = distro_name

    def compose(self) -> ComposeResult:
        yield Container(
            Static(f"[b]Replace {os.path.basename(self.path)}?[/b]"),
            Static(
                f"{self.path} already exists.\n"
                f"Replace it with the new {self.distro_name} script?",
                markup=False,
            ),
            Horizontal(
                Button("Keep old (n)", id="keep", variant="error"),
                Button("Replace (y)", id="replace", variant="success"),
            ),
            id="modal",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "replace")

    def action_replace(self) -> None:
        self.dismiss(True)

    def action_keep(self) -> None:
        self.dismiss(False)

class ScriptSavedModal(ModalScreen[None]):
    """Shows where a script went and how to run it; `c` copies the run line."""

    BINDINGS = [
        ("c", "copy_run", "Copy run line"),
        ("escape", "close", "Close"),
    ]

    def __init__(self, path: str):
        super().__init__()
        self.path = path

    @property
    def run_line(self) -> str:
        return f"bash {self.path}"

    def compose(self) -> ComposeResult:
        yield Container(
            Static("[b]Script saved[/b]"),
            Static(f"{self.path}\n\nRun it with:\n  {self.run_line}", markup=False),
            Horizontal(
                Button("Copy run line (c)", id="copy_run", variant="success"),
                Button("Close", id="close", variant="primary"),
            ),
            id="modal",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "copy_run":
            self.action_copy_run()
        else:
            self.dismiss(None)

    def action_copy_run(self) -> None:
        self.app.copy_to_clipboard(self.run_line)
        self.app.notify("Run line copied")
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)

class ErrorModal(ModalScreen[None]):
    BINDINGS = [("escape", "close", "Close")]

    def __init__(self, title: str, detail: str):
        super().__init__()
        self._title = title
        self._detail = detail

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self._title, markup=False),
            Static(self._detail, markup=False),
            Button("Close", id="close", variant="primary"),
            id="modal",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
