"""Request correlation middleware.

Every request gets an id, taken from the ``X-Request-ID`` header when the
caller (usually the coaching platform's backend) sends one. The id is kept
on ``request.state``, echoed in the response and attached to the access log
line so scoring logs can be traced back to the call that produced them.
"""

import logging
import time
import uuid
from typing import Any, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Longer caller-supplied ids are replaced rather than logged
MAX_REQUEST_ID_LENGTH = 128


def resolve_request_id(header_value: str | None) -> str:
    """Use the caller's request id if it is sane, otherwise generate one."""
    if header_value and header_value.strip() and len(header_value) <= MAX_REQUEST_ID_LENGTH:
        return header_value.strip()
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request id and log the outcome of each API call."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f}ms)",
            extra={"request_id": request_id},
        )
        return response
