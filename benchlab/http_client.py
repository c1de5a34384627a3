import logging
from collections.abc import Awaitable, Callable

import httpx

from .models import HttpResponse

logger = logging.getLogger(__name__)

Sender = Callable[[str, str, dict[str, str], bytes | None], Awaitable[HttpResponse]]
Requester = Callable[[str, str, dict[str, str], bytes | None, bool], Awaitable[HttpResponse]]
ClientFactory = Callable[[], Awaitable[httpx.AsyncClient]]


async def perform_http_request(
    method: str,
    url: str,
    headers: dict[str, str],
    content: bytes | None,
    verify_tls: bool = True,
    *,
    client_factory: ClientFactory | None = None,
    requester: Requester | None = None,
) -> HttpResponse:
    """Send one request and read the whole body.

    No timeout is passed, so httpx's own default applies.
    """
    if requester is not None:
        return await requester(method, url, headers, content, verify_tls)
    if client_factory is not None:
        client = await client_factory()
        return await _send(client, method, url, headers, content)
    async with httpx.AsyncClient(verify=verify_tls) as client:
        return await _send(client, method, url, headers, content)


async def _send(
    client: httpx.AsyncClient, method: str, url: str, headers: dict[str, str], content: bytes | None
) -> HttpResponse:
    logger.debug("%s %s (%d header(s), %d body bytes)", method, url, len(headers), len(content or b""))
    resp = await client.request(method, url, headers=headers, content=content)
    return HttpResponse(
        status=resp.status_code,
        status_text=resp.reason_phrase,
        ok=resp.is_success,
        headers=resp.headers,
        text=resp.text,
    )
