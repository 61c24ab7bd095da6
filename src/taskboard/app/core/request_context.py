"""Request correlation identifiers shared by logging and error handling."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


def current_request_id() -> str:
    """Return the correlation id bound to the running request, or ``"-"``."""

    return _request_id.get()


@contextmanager
def request_id_scope(request_id: str | None) -> Iterator[None]:
    """Bind ``request_id`` for the duration of the block (no-op when empty)."""

    if not request_id:
        yield
        return
    token = _request_id.set(request_id)
    try:
        yield
    finally:
        _request_id.reset(token)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Read or mint an ``X-Request-ID`` and echo it on the response."""

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER):  # type: ignore[override]
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request_id = request.headers.get(self._header_name) or uuid.uuid4().hex
        request.state.request_id = request_id
        with request_id_scope(request_id):
            response = await call_next(request)
        response.headers.setdefault(self._header_name, request_id)
        return response


__all__ = [
    "REQUEST_ID_HEADER",
    "CorrelationIdMiddleware",
    "current_request_id",
    "request_id_scope",
]
