from collections.abc import Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header

from .catalog import PRESET_PROFILES
from .config import Settings
from .http_client import Sender
from .models import Profile
from .session import new_session
from .views import BenchmarkView


class BenchmarkLab(App[None]):
    """Terminal bench for firing one request at a catalogued API and reading the result."""

    TITLE = "Benchmark Lab"
    SUB_TITLE = "API comparison"

    CSS = """
    Screen {
        background: #10141d;
    }

    #app-header {
        background: #2a2f45;
        color: #f4f6fb;
    }

    #main {
        height: 1fr;
        padding: 0 1;
    }

    .columns {
        height: 1fr;
        border: round #2c3650;
    }

    .sidebar, .left-panel, .right-panel {
        padding: 0 1;
        background: #151b28;
    }

    .sidebar {
        width: 24%;
        border-right: tall #2c3650;
    }

    .left-panel {
        width: 42%;
        border-right: tall #2c3650;
    }

    .right-panel {
        width: 1fr;
        height: 1fr;
    }

    .box {
        border: round #33405e;
        background: #111724;
    }

    .catalog {
        height: 1fr;
    }

    .title-row, .method-row {
        height: auto;
    }

    .title {
        width: auto;
        color: #f4f6fb;
        text-style: bold;
    }

    .description, .meta {
        color: #9aa6bf;
    }

    .label {
        width: auto;
        color: #f2a541;
        text-style: bold;
    }

    .method-select {
        width: 16;
    }

    .expand {
        width: 1fr;
        height: auto;
    }

    .endpoint-input {
        width: 100%;
        background: #111724;
        color: #e8ecf5;
        border: tall #33405e;
    }

    .endpoint-input:focus {
        border: tall #f2a541;
    }

    .query-box, .headers-box {
        height: 6;
    }

    .body-box {
        height: 10;
    }

    .actions {
        height: auto;
    }

    .actions SmallButton {
        margin-right: 1;
    }

    .status {
        color: #87d7ff;
        padding: 0 1;
    }

    .status.error {
        color: #ff8a8a;
        text-style: bold;
    }

    TabbedContent, TabPane {
        height: 1fr;
    }

    .response-box {
        height: 1fr;
        scrollbar-size-vertical: 1;
        scrollbar-color: #f2a541;
        scrollbar-background: #10141d;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "run", "Run request"),
        Binding("f5", "run", "Run request"),
        Binding("ctrl+r", "reset", "Reset to preset"),
        Binding("ctrl+l", "focus_base_url", "Focus base URL"),
        Binding("ctrl+shift+c", "copy_response", "Copy response"),
        Binding("meta+c", "copy_response", "Copy response"),  # macOS Command+C
        Binding("f12", "quit", "Quit"),
    ]

    def __init__(
        self,
        profiles: Sequence[Profile] | None = None,
        settings: Settings | None = None,
        sender: Sender | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.session = new_session(profiles or PRESET_PROFILES, sender=sender, verify_tls=self.settings.verify_tls)
        self.view: BenchmarkView | None = None

    def compose(self) -> ComposeResult:
        yield Header(id="app-header", show_clock=True)
        with Container(id="main"):
            self.view = BenchmarkView(self.session, id="bench")
            yield self.view
        yield Footer()

    def on_mount(self) -> None:
        if self.view:
            self.view.focus_catalog()
        if not self.settings.verify_tls:
            self.notify("TLS verification is disabled for every request.", severity="warning")

    def action_run(self) -> None:
        if self.view:
            self.view.start_run()

    def action_reset(self) -> None:
        if self.view:
            self.view.reset_form()

    def action_focus_base_url(self) -> None:
        if self.view:
            self.view.focus_base_url()

    def action_copy_response(self) -> None:
        if self.view:
            self.view.copy_response()
