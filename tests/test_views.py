# ruff: noqa: S101
import logging

import httpx
import pytest

from benchlab.catalog import PRESET_PROFILES
from benchlab.session import new_session
from benchlab.views import BenchmarkView, copy_text_with_fallback, format_checklist


class StubVal:
    def __init__(self, value: str = "") -> None:
        self.value = value
        self.text = value

    def load_text(self, text: str) -> None:
        self.text = text


class StubButton:
    def __init__(self) -> None:
        self.disabled = False

    def set_busy(self, busy: bool) -> None:
        self.disabled = busy


class StubStatic:
    def __init__(self) -> None:
        self.content = ""
        self.classes: set[str] = set()

    def update(self, content: str) -> None:
        self.content = content

    def set_class(self, add: bool, name: str) -> None:
        if add:
            self.classes.add(name)
        else:
            self.classes.discard(name)


class StubBadge:
    def __init__(self) -> None:
        self.text: str | None = None
        self.tone = "neutral"

    def show(self, text, tone: str = "neutral") -> None:
        self.text = text
        self.tone = tone


class TestableBenchmarkView(BenchmarkView):
    __test__ = False  # prevent pytest from collecting this helper as a test class

    def __init__(self, session) -> None:
        super().__init__(session)
        form = session.form
        self.inputs = {"base-url": StubVal(form.base_url), "path": StubVal(form.path)}
        self.areas = {
            "query": StubVal(form.query_text),
            "headers": StubVal(form.headers_text),
            "body": StubVal(form.body_text),
            "response": StubVal(""),
            "request": StubVal(""),
        }
        self.method_select = StubVal(form.method)
        self.buttons = {"run": StubButton(), "reset": StubButton()}
        self.statics = {name: StubStatic() for name in ("title", "description", "checklist", "meta", "status")}
        self.badges = {"complexity": StubBadge(), "http-status": StubBadge()}

    def _input(self, name: str):
        return self.inputs[name]

    def _textarea(self, name: str):
        return self.areas[name]

    def _select(self, name: str):
        return self.method_select

    def _button(self, name: str):
        return self.buttons[name]

    def _static(self, name: str):
        return self.statics[name]

    def _badge(self, name: str):
        return self.badges[name]


@pytest.fixture
def view(sender):
    return TestableBenchmarkView(new_session(PRESET_PROFILES, sender=sender))


@pytest.mark.asyncio
async def test_run_request_shows_response(view, sender, response_factory):
    sender.responses.append(response_factory(200, '{"ok":true}', "OK"))

    await view.run_request()

    assert view.busy is False
    assert view.areas["response"].text == '{\n  "ok": true\n}'
    assert '"url": "https://sandbox.gatewaya.com/v1/payments?expand=customer"' in view.areas["request"].text
    assert view.statics["meta"].content.startswith("Latency: ")
    assert view.badges["http-status"].text == "200 OK"
    assert view.badges["http-status"].tone == "success"


@pytest.mark.asyncio
async def test_run_request_uses_edited_fields(view, sender):
    view.method_select.value = "PUT"
    view.inputs["path"].value = "payments/42"
    view.areas["query"].text = ""
    view.areas["body"].text = '{"amount": 5}'

    await view.run_request()

    method, url, _, content = sender.calls[0]
    assert method == "PUT"
    assert url == "https://sandbox.gatewaya.com/payments/42"
    assert content == b'{"amount":5}'


@pytest.mark.asyncio
async def test_invalid_headers_show_form_error(view, sender):
    view.areas["headers"].text = "{bad"

    await view.run_request()

    status = view.statics["status"]
    assert status.content.startswith('Field "Headers" is not valid JSON')
    assert "error" in status.classes
    assert view.areas["response"].text == ""
    assert sender.calls == []


@pytest.mark.asyncio
async def test_transport_failure_is_shown_in_body(view, sender):
    sender.error = httpx.ConnectError("Name or service not known")

    await view.run_request()

    assert view.areas["response"].text == "Name or service not known"
    assert view.badges["http-status"].text == "Request failed"
    assert view.badges["http-status"].tone == "danger"


@pytest.mark.asyncio
async def test_run_request_ignored_while_busy(view, sender):
    view.busy = True
    await view.run_request()
    assert sender.calls == []


def test_choose_profile_loads_form(view):
    view.choose_profile("loans")

    loans = PRESET_PROFILES[1]
    assert view.method_select.value == "GET"
    assert view.inputs["base-url"].value == loans.base_url
    assert view.inputs["path"].value == loans.path
    assert '"includeOffers": true' in view.areas["query"].text
    assert view.statics["title"].content == loans.label
    assert "x-api-key" in view.statics["checklist"].content
    assert view.badges["complexity"].tone == "medium"


def test_reset_form_discards_edits(view):
    view.inputs["path"].value = "/changed"
    view.areas["body"].text = "{}"

    view.reset_form()

    assert view.inputs["path"].value == "/v1/payments"
    assert '"amount": 1000' in view.areas["body"].text


def test_format_checklist():
    assert format_checklist(PRESET_PROFILES[0]).startswith("• Generate a Bearer token")


class _ClipboardApp:
    def __init__(self) -> None:
        self.copied: list[str] = []

    def copy_to_clipboard(self, text: str) -> None:
        self.copied.append(text)


def test_copy_text_with_fallback_uses_app_clipboard():
    app = _ClipboardApp()
    statuses: list[str] = []

    copy_text_with_fallback(app, '{"a": 1}', logging.getLogger("test"), statuses.append)

    assert app.copied == ['{"a": 1}']
    assert statuses == ["Response copied to clipboard."]


def test_copy_text_with_fallback_skips_empty_text():
    app = _ClipboardApp()
    statuses: list[str] = []

    copy_text_with_fallback(app, "   ", logging.getLogger("test"), statuses.append)

    assert app.copied == []
    assert statuses == ["Nothing to copy."]


class _BrokenClipboardApp:
    def copy_to_clipboard(self, text: str) -> None:
        raise RuntimeError("no OSC 52")


def test_copy_text_with_fallback_reports_missing_clipboard(monkeypatch):
    monkeypatch.setattr("benchlab.views.shutil.which", lambda name: None)
    statuses: list[str] = []

    copy_text_with_fallback(_BrokenClipboardApp(), "payload", logging.getLogger("test"), statuses.append)

    assert statuses == ["Copy failed: no clipboard available."]


def test_copy_text_with_fallback_uses_pbcopy(monkeypatch):
    calls = []
    monkeypatch.setattr("benchlab.views.shutil.which", lambda name: "/usr/bin/pbcopy")
    monkeypatch.setattr("benchlab.views.subprocess.run", lambda args, **kwargs: calls.append((args, kwargs["input"])))
    statuses: list[str] = []

    copy_text_with_fallback(_BrokenClipboardApp(), "payload", logging.getLogger("test"), statuses.append)

    assert calls == [(["/usr/bin/pbcopy"], "payload")]
    assert statuses == ["Response copied via pbcopy."]
