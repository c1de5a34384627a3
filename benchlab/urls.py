import ipaddress
import re
from collections.abc import Mapping
from typing import Any

import httpx

from .errors import UrlError
from .models import FormState, ParsedFields, ParsedRequest
from .parsing import has_content, normalize_headers, stringify_scalar, validate

ALLOWED_SCHEMES = {"http", "https"}
MAX_PORT = 65535
# Registered-name characters left after IDNA encoding; "%" escapes are not hosts.
_HOST_RE = re.compile(r"[A-Za-z0-9\-._~!$&'()*+,;=]+")


def join_base_and_path(base_url: str, path: str) -> str:
    base = base_url.strip()
    if base.endswith("/"):
        base = base[:-1]
    path = path.strip()
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base}{path}"


def _valid_host(raw_host: str) -> bool:
    try:
        ipaddress.ip_address(raw_host)
    except ValueError:
        return _HOST_RE.fullmatch(raw_host) is not None
    return True


def _check_authority(url: httpx.URL) -> None:
    raw_host = url.raw_host.decode("ascii", errors="replace")
    if not _valid_host(raw_host):
        raise UrlError(f"Invalid host: {url.host}")
    if url.port is not None and not 0 <= url.port <= MAX_PORT:
        raise UrlError(f"Port out of range: {url.port}")


def build_url(base_url: str, path: str, query: Mapping[str, Any]) -> str:
    """Compose an absolute URL and set each non-null query value on it."""
    try:
        url = httpx.URL(join_base_and_path(base_url, path))
    except (httpx.InvalidURL, ValueError) as exc:
        raise UrlError(str(exc)) from exc

    if url.scheme not in ALLOWED_SCHEMES:
        raise UrlError(f"Unsupported URL scheme: {url.scheme or 'missing'}")
    if not url.host:
        raise UrlError("Missing host in URL.")
    _check_authority(url)

    for key, value in query.items():
        if value is None:
            continue
        url = url.copy_set_param(str(key), stringify_scalar(value))
    return str(url)


def compose_request(form: FormState, fields: ParsedFields) -> ParsedRequest:
    url = build_url(form.base_url, form.path, fields.query)
    body = fields.body if fields.method != "GET" and has_content(fields.body) else None
    return ParsedRequest(
        method=fields.method,
        url=url,
        headers=normalize_headers(fields.headers),
        query=fields.query,
        body=body,
    )


def prepare_request(form: FormState) -> ParsedRequest:
    """Validate ``form`` and turn it into a request ready for dispatch.

    Raises ``ValidationError`` or ``UrlError``; nothing is sent here.
    """
    return compose_request(form, validate(form))
