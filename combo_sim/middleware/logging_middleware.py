"""Request/response logging middleware for FastAPI.

Simulation endpoints report the run they executed through response
headers; the middleware folds those into the completion log line so a
request can be matched to its simulation in the logs.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from combo_sim.core.logging_config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time-Ms"
TRIAL_COUNT_HEADER = "X-Trial-Count"
BASE_SEED_HEADER = "X-Base-Seed"


def simulation_context(response: Response) -> dict:
    """Extract the simulation details an endpoint attached to its response."""
    context = {}
    trial_count = response.headers.get(TRIAL_COUNT_HEADER)
    if trial_count is not None:
        context["trial_count"] = int(trial_count)
    base_seed = response.headers.get(BASE_SEED_HEADER)
    if base_seed is not None:
        context["base_seed"] = int(base_seed)
    return context


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its duration and any simulation it ran."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        start_time = time.perf_counter()
        logger.debug(
            f"Request started: {request.method} {request.url.path}",
            extra={"extra_data": {"request_id": request_id}},
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed: {request.method} {request.url.path}",
                extra={
                    "extra_data": {
                        "request_id": request_id,
                        "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
                        "error": str(e),
                    }
                },
                exc_info=True,
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        log_level = "warning" if response.status_code >= 400 else "info"
        getattr(logger, log_level)(
            f"{request.method} {request.url.path} -> {response.status_code} in {duration_ms}ms",
            extra={
                "extra_data": {
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    **simulation_context(response),
                }
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = str(duration_ms)
        return response
