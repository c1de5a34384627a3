from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import TransportError

Scalar = str | int | float | bool | None


@dataclass(frozen=True)
class Profile:
    id: str
    label: str
    complexity: str
    description: str
    method: str = "GET"
    base_url: str = ""
    path: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, Scalar] = field(default_factory=dict)
    body: Any = field(default_factory=dict)
    checklist: tuple[str, ...] = ()


@dataclass
class FormState:
    method: str = "GET"
    base_url: str = ""
    path: str = "/"
    headers_text: str = "{}"
    query_text: str = "{}"
    body_text: str = "{}"


@dataclass
class ParsedFields:
    method: str
    headers: dict[str, Any]
    query: dict[str, Any]
    body: Any


@dataclass
class ParsedRequest:
    method: str
    url: str
    headers: dict[str, str]
    query: dict[str, Any]
    body: Any = None

    @property
    def has_body(self) -> bool:
        return self.body is not None


@dataclass
class HttpResponse:
    status: int
    status_text: str
    ok: bool
    headers: Mapping[str, str]
    text: str


@dataclass
class RawOutcome:
    elapsed_ms: int
    response: HttpResponse | None = None
    error: TransportError | None = None


@dataclass
class RequestSnapshot:
    method: str
    headers: dict[str, str]
    query: dict[str, Any]
    body: Any = None


@dataclass
class ResponseOutcome:
    status: int
    status_text: str
    ok: bool
    content_type: str | None
    preview: str | None = None


@dataclass
class ErrorOutcome:
    error_message: str


@dataclass
class RunResult:
    timestamp: datetime
    url: str
    duration_ms: int
    request: RequestSnapshot
    outcome: ResponseOutcome | ErrorOutcome

    @property
    def response(self) -> ResponseOutcome | None:
        return self.outcome if isinstance(self.outcome, ResponseOutcome) else None

    @property
    def error(self) -> str | None:
        return self.outcome.error_message if isinstance(self.outcome, ErrorOutcome) else None
