"""
Request logging middleware.

One line per request. Level follows the response status: INFO below 400,
WARNING for 4xx, ERROR for 5xx.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

logger = logging.getLogger("api.request")


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    started = time.perf_counter()
    client = request.client.host if request.client else "-"
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "request_failed method=%s path=%s query=%s client=%s",
            request.method,
            request.url.path,
            request.url.query,
            client,
        )
        raise

    elapsed_ms = (time.perf_counter() - started) * 1000.0
    logger.log(
        level_for_status(response.status_code),
        "request_completed method=%s path=%s query=%s status=%s elapsed_ms=%.2f client=%s",
        request.method,
        request.url.path,
        request.url.query,
        response.status_code,
        elapsed_ms,
        client,
    )
    return response
