import asyncio
import logging
import shutil
import subprocess
from collections.abc import Callable
from typing import Any

from textual.containers import Container, Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Button, Input, OptionList, Select, Static, TabbedContent, TabPane, TextArea
from textual.widgets.option_list import Option

from .catalog import complexity_class
from .config import DEFAULT_METHOD, HTTP_METHODS
from .errors import BusyError
from .models import FormState, Profile, RunResult
from .results import render_body, render_meta, render_request, render_status
from .session import Session, reset, run, select_profile
from .ui_components import Badge, SmallButton

EMPTY_RESULT_HINT = "Run a request to see the full payload, HTTP status and response body here."


def _pbcopy(text: str, logger: logging.Logger) -> bool:
    binary = shutil.which("pbcopy")
    if binary is None:
        return False
    try:
        subprocess.run([binary], input=text, text=True, check=True, timeout=2)  # noqa: S603
    except (subprocess.SubprocessError, OSError) as exc:
        logger.debug("pbcopy failed: %s", exc)
        return False
    return True


def copy_text_with_fallback(app: Any, text: str, logger: logging.Logger, set_status: Callable[[str], None]) -> None:
    """Copy through the terminal (OSC 52), falling back to pbcopy where it exists."""
    if not text.strip():
        set_status("Nothing to copy.")
        return
    try:
        app.copy_to_clipboard(text)
    except Exception as exc:  # pragma: no cover
        logger.debug("Terminal clipboard copy failed: %s", exc)
    else:
        set_status("Response copied to clipboard.")
        return
    if _pbcopy(text, logger):
        set_status("Response copied via pbcopy.")
    else:
        set_status("Copy failed: no clipboard available.")


def format_checklist(profile: Profile) -> str:
    return "\n".join(f"• {item}" for item in profile.checklist) or "Nothing to configure."


class BenchmarkView(Container):
    """Catalog, request builder and debug panel around one ``Session``."""

    busy: reactive[bool] = reactive(False)
    logger = logging.getLogger(__name__)

    def __init__(self, session: Session, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.session = session
        self._run_task: asyncio.Task[None] | None = None

    def _wid(self, name: str) -> str:
        return f"bench-{name}"

    def compose(self):
        profile = self.session.selected
        form = self.session.form
        with Horizontal(classes="columns"):
            with Vertical(classes="sidebar"):
                yield Static(f"Catalog ({len(self.session.profiles)})", classes="label")
                yield OptionList(
                    *(Option(f"{p.label} · {p.complexity}", id=p.id) for p in self.session.profiles),
                    id=self._wid("catalog"),
                    classes="box catalog",
                )
            with Vertical(classes="left-panel"):
                with Horizontal(classes="title-row"):
                    yield Static(profile.label, id=self._wid("title"), classes="title", markup=False)
                    yield Badge(
                        profile.complexity, tone=complexity_class(profile.complexity), id=self._wid("complexity")
                    )
                yield Static(profile.description, id=self._wid("description"), classes="description", markup=False)
                yield Static("Method / Base URL", classes="label")
                with Horizontal(classes="method-row"):
                    yield Select(
                        [(method, method) for method in HTTP_METHODS],
                        value=form.method,
                        allow_blank=False,
                        id=self._wid("method"),
                        classes="method-select",
                    )
                    with Container(classes="expand"):
                        yield Input(
                            value=form.base_url,
                            placeholder="https://api.example.com",
                            id=self._wid("base-url"),
                            classes="endpoint-input",
                        )
                yield Static("Endpoint", classes="label")
                yield Input(value=form.path, placeholder="/v1/resource", id=self._wid("path"), classes="endpoint-input")
                yield Static("Query params (JSON)", classes="label")
                yield TextArea(form.query_text, language="json", id=self._wid("query"), classes="box query-box")
                yield Static("Headers (JSON)", classes="label")
                yield TextArea(form.headers_text, language="json", id=self._wid("headers"), classes="box headers-box")
                yield Static("Body (JSON)", classes="label")
                yield TextArea(form.body_text, language="json", id=self._wid("body"), classes="box body-box")
                with Horizontal(classes="actions"):
                    yield SmallButton("Reset to preset", id=self._wid("reset"), variant="ghost")
                    yield SmallButton(
                        "Run (Ctrl+S / F5)", id=self._wid("run"), variant="primary", busy_label="Running..."
                    )
                    yield SmallButton("Copy", id=self._wid("copy-response"), variant="ghost")
                yield Static("", id=self._wid("status"), classes="status", markup=False)
            with Vertical(classes="right-panel"):
                with Horizontal(classes="title-row"):
                    yield Static("Response", classes="label")
                    yield Badge("", id=self._wid("http-status"))
                yield Static(render_meta(None), id=self._wid("meta"), classes="meta", markup=False)
                with TabbedContent(classes="right-tabs"):
                    with TabPane("Body", id=self._wid("body-tab")):
                        yield TextArea(
                            EMPTY_RESULT_HINT,
                            language="json",
                            id=self._wid("response"),
                            read_only=True,
                            classes="box response-box",
                        )
                    with TabPane("Request", id=self._wid("request-tab")):
                        yield TextArea(
                            "",
                            language="json",
                            id=self._wid("request"),
                            read_only=True,
                            classes="box response-box",
                        )
                    with TabPane("Checklist", id=self._wid("checklist-tab")):
                        yield Static(format_checklist(profile), id=self._wid("checklist"), markup=False)

    def watch_busy(self, busy: bool) -> None:
        self._button("run").set_busy(busy)
        self._button("reset").disabled = busy
        self._set_status("Sending request..." if busy else "")

    def focus_base_url(self) -> None:
        self._input("base-url").focus()

    def focus_catalog(self) -> None:
        self.query_one(f"#{self._wid('catalog')}", OptionList).focus()

    def current_form(self) -> FormState:
        method = self._select("method").value
        return FormState(
            method=method if isinstance(method, str) else DEFAULT_METHOD,
            base_url=self._input("base-url").value,
            path=self._input("path").value,
            headers_text=self._textarea("headers").text,
            query_text=self._textarea("query").text,
            body_text=self._textarea("body").text,
        )

    def load_form(self, form: FormState) -> None:
        self._select("method").value = form.method
        self._input("base-url").value = form.base_url
        self._input("path").value = form.path
        self._textarea("query").load_text(form.query_text)
        self._textarea("headers").load_text(form.headers_text)
        self._textarea("body").load_text(form.body_text)

    def show_profile(self, profile: Profile) -> None:
        self._static("title").update(profile.label)
        self._static("description").update(profile.description)
        self._static("checklist").update(format_checklist(profile))
        self._badge("complexity").show(profile.complexity, complexity_class(profile.complexity))

    def choose_profile(self, profile_id: str) -> None:
        form = select_profile(self.session, profile_id)
        self.load_form(form)
        self.show_profile(self.session.selected)
        self._set_status("")

    def reset_form(self) -> None:
        if self.busy:
            return
        self.load_form(reset(self.session))
        self._set_status("")

    def start_run(self) -> None:
        if self.busy:
            return
        self._run_task = asyncio.create_task(self.run_request())

    async def run_request(self) -> None:
        if self.busy:
            return

        self.session.form = self.current_form()
        self.busy = True
        try:
            result = await run(self.session)
        except BusyError:
            self.logger.debug("Run ignored: another request is in flight.")
            return
        finally:
            self.busy = False

        if result is None:
            self._set_status(self.session.error or "", error=True)
        else:
            self.show_result(result)

    def show_result(self, result: RunResult) -> None:
        self._textarea("response").load_text(render_body(result))
        self._textarea("request").load_text(render_request(result))
        self._static("meta").update(render_meta(result))
        if result.response is not None:
            self._badge("http-status").show(render_status(result), "success" if result.response.ok else "danger")
        else:
            self._badge("http-status").show("Request failed", "danger")

    def copy_response(self) -> None:
        copy_text_with_fallback(self.app, self._textarea("response").text, self.logger, self._set_status)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == self._wid("run"):
            self.start_run()
        elif event.button.id == self._wid("reset"):
            self.reset_form()
        elif event.button.id == self._wid("copy-response"):
            self.copy_response()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id is not None:
            self.choose_profile(event.option.id)

    def _textarea(self, name: str) -> TextArea:
        return self.query_one(f"#{self._wid(name)}", TextArea)

    def _input(self, name: str) -> Input:
        return self.query_one(f"#{self._wid(name)}", Input)

    def _select(self, name: str) -> Select:
        return self.query_one(f"#{self._wid(name)}", Select)

    def _button(self, name: str) -> SmallButton:
        return self.query_one(f"#{self._wid(name)}", SmallButton)

    def _static(self, name: str) -> Static:
        return self.query_one(f"#{self._wid(name)}", Static)

    def _badge(self, name: str) -> Badge:
        return self.query_one(f"#{self._wid(name)}", Badge)

    def _set_status(self, message: str, error: bool = False) -> None:
        status = self._static("status")
        status.update(message)
        status.set_class(error and bool(message), "error")
