"""Request latency logging middleware."""

import logging
import time
from typing import Callable

from fastapi import Request, Response

logger = logging.getLogger(__name__)

# Thresholds for log levels (in milliseconds)
SLOW_REQUEST_THRESHOLD_MS = 1000
VERY_SLOW_REQUEST_THRESHOLD_MS = 3000

# Probed constantly by the platform; only slow ones are logged
QUIET_PATHS = frozenset({"/health", "/health/ready"})


def _log_level(status_code: int, latency_ms: float, error: bool) -> tuple[int, str]:
    """Pick a log level and message prefix for a finished request."""
    if error or status_code >= 500:
        return logging.ERROR, ""
    if latency_ms > VERY_SLOW_REQUEST_THRESHOLD_MS:
        return logging.ERROR, "VERY SLOW REQUEST: "
    if latency_ms > SLOW_REQUEST_THRESHOLD_MS:
        return logging.WARNING, "SLOW REQUEST: "
    if status_code >= 400:
        return logging.WARNING, ""
    return logging.INFO, ""


async def latency_logging_middleware(request: Request, call_next: Callable) -> Response:
    """Log method, path, status and latency for every HTTP request.

    Args:
        request: The incoming request.
        call_next: The next middleware/handler in the chain.

    Returns:
        Response: The response from the handler.
    """
    start_time = time.perf_counter()
    method = request.method
    path = request.url.path

    response = None
    error_occurred = False

    try:
        response = await call_next(request)
        return response
    except Exception:
        error_occurred = True
        raise
    finally:
        latency_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code if response else 500
        log_msg = f"{method} {path} - {status_code} - {latency_ms:.2f}ms"
        log_data = {
            "method": method,
            "path": path,
            "status_code": status_code,
            "latency_ms": round(latency_ms, 2),
        }

        if path in QUIET_PATHS:
            if latency_ms > 100:
                logger.debug(log_msg, extra=log_data)
        else:
            level, prefix = _log_level(status_code, latency_ms, error_occurred)
            logger.log(level, f"{prefix}{log_msg}", extra=log_data)
