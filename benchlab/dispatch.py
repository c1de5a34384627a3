import logging
import time
from functools import partial

from .errors import BusyError, TransportError
from .http_client import Sender, perform_http_request
from .models import ParsedRequest, RawOutcome
from .parsing import dump_compact

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> int:
    return max(0, round((time.perf_counter() - started) * 1000))


class Dispatcher:
    """Issues one request at a time and times the full round trip.

    A second ``dispatch`` while one is outstanding raises ``BusyError``.
    Transport failures come back as ``RawOutcome.error``; nothing is retried.
    """

    def __init__(self, sender: Sender | None = None, *, verify_tls: bool = True) -> None:
        self._sender: Sender = sender or partial(perform_http_request, verify_tls=verify_tls)
        self.in_flight = False

    async def dispatch(self, request: ParsedRequest) -> RawOutcome:
        if self.in_flight:
            raise BusyError("A request is already in flight.")

        content = dump_compact(request.body).encode("utf-8") if request.has_body else None
        self.in_flight = True
        started = time.perf_counter()
        try:
            response = await self._sender(request.method, request.url, dict(request.headers), content)
        except Exception as exc:
            elapsed = _elapsed_ms(started)
            logger.debug("%s %s failed after %d ms: %r", request.method, request.url, elapsed, exc)
            return RawOutcome(elapsed_ms=elapsed, error=TransportError.from_exception(exc))
        finally:
            self.in_flight = False

        elapsed = _elapsed_ms(started)
        logger.debug("%s %s -> %s in %d ms", request.method, request.url, response.status, elapsed)
        return RawOutcome(elapsed_ms=elapsed, response=response)
