from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from .config import EMPTY_BODY_PLACEHOLDER, MISSING_VALUE, TIMESTAMP_FORMAT
from .models import (
    ErrorOutcome,
    ParsedRequest,
    RawOutcome,
    RequestSnapshot,
    ResponseOutcome,
    RunResult,
)
from .parsing import dump_pretty, parse_json


def format_preview(text: str) -> str | None:
    """Pretty-print a JSON body; any other non-empty body is returned as is."""
    if not text:
        return None
    try:
        parsed = parse_json(text)
    except ValueError:
        return text
    return dump_pretty(parsed)


def snapshot_of(request: ParsedRequest) -> RequestSnapshot:
    return RequestSnapshot(
        method=request.method,
        headers=dict(request.headers),
        query=dict(request.query),
        body=request.body,
    )


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    wanted = name.lower()
    for key, candidate in headers.items():
        if key.lower() == wanted:
            return candidate
    return None


def normalize(
    raw: RawOutcome, url: str, snapshot: RequestSnapshot, timestamp: datetime | None = None
) -> RunResult:
    """Fold a dispatch outcome into a single ``RunResult``.

    Any completed exchange is a ``ResponseOutcome``, whatever its status code.
    Only a failure to complete the exchange yields an ``ErrorOutcome``.
    """
    outcome: ResponseOutcome | ErrorOutcome
    if raw.response is not None and raw.error is None:
        response = raw.response
        outcome = ResponseOutcome(
            status=response.status,
            status_text=response.status_text,
            ok=response.ok,
            content_type=_header(response.headers, "content-type"),
            preview=format_preview(response.text),
        )
    else:
        outcome = ErrorOutcome(error_message=str(raw.error) if raw.error is not None else "No response received.")
    return RunResult(
        timestamp=timestamp or datetime.now(),
        url=url,
        duration_ms=max(0, raw.elapsed_ms),
        request=snapshot,
        outcome=outcome,
    )


def render_body(result: RunResult) -> str:
    if isinstance(result.outcome, ErrorOutcome):
        return result.outcome.error_message
    return result.outcome.preview if result.outcome.preview is not None else EMPTY_BODY_PLACEHOLDER


def render_request(result: RunResult) -> str:
    return dump_pretty(
        {
            "url": result.url,
            "method": result.request.method,
            "headers": result.request.headers,
            "query": result.request.query,
            "body": result.request.body,
        }
    )


def render_status(result: RunResult | None) -> str | None:
    if result is None or result.response is None:
        return None
    return f"{result.response.status} {result.response.status_text}".strip()


def format_latency(result: RunResult | None) -> str:
    return MISSING_VALUE if result is None else f"{result.duration_ms} ms"


def format_timestamp(result: RunResult | None) -> str:
    return MISSING_VALUE if result is None else result.timestamp.strftime(TIMESTAMP_FORMAT)


def render_meta(result: RunResult | None) -> str:
    content_type = result.response.content_type if result is not None and result.response is not None else None
    return "   ".join(
        [
            f"Latency: {format_latency(result)}",
            f"Content: {content_type or MISSING_VALUE}",
            f"Ran at: {format_timestamp(result)}",
        ]
    )
