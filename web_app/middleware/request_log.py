"""Per-request access logging."""

import time

from fastapi import Request

from shortener.common.logging_config import get_logger

logger = get_logger("web")


async def log_requests(request: Request, call_next):
    """Log one line per request with status and duration.

    Server errors are logged at warning so they stand out from normal traffic.
    """
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000

    level = "warning" if response.status_code >= 500 else "info"
    getattr(logger, level)(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response
