import json
import time
from typing import Any, Dict
from uuid import uuid4

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"

# Logged by length only: recordings, answers and text sent for synthesis
LENGTH_ONLY_FIELDS = frozenset({"audio", "answer", "text", "transcript", "feedback"})
MAX_LOGGED_VALUE = 100


def summarize_body(body: bytes, content_type: str) -> Dict[str, Any]:
    """Flat ``body_*`` log fields for a request body."""
    if not body:
        return {}
    if "application/json" not in content_type:
        return {"body_length": len(body)}
    try:
        data = json.loads(body.decode())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {"body_length": len(body)}
    if not isinstance(data, dict):
        return {"body_length": len(body)}

    fields: Dict[str, Any] = {}
    for key, value in data.items():
        if key in LENGTH_ONLY_FIELDS and isinstance(value, str):
            fields[f"body_{key}_length"] = len(value)
        elif isinstance(value, str):
            fields[f"body_{key}"] = value[:MAX_LOGGED_VALUE]
        elif value is None or isinstance(value, (int, float, bool)):
            fields[f"body_{key}"] = value
        else:
            fields[f"body_{key}"] = str(value)[:MAX_LOGGED_VALUE]
    return fields


class LoggingMiddleware(BaseHTTPMiddleware):
    """One start and one completion event per request, tied by a request id.

    A caller-supplied ``X-Request-ID`` is reused, otherwise one is generated.
    The id is bound into structlog's context for everything logged while the
    request runs.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        started = time.perf_counter()
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            fields: Dict[str, Any] = {"method": request.method, "path": request.url.path}
            if request.query_params:
                fields["query_params"] = dict(request.query_params)
            if request.method in ("POST", "PUT", "PATCH"):
                fields.update(summarize_body(await request.body(), request.headers.get("content-type", "")))
            logger.info("Request received", **fields)

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error("Request crashed", path=request.url.path, error=str(e),
                             duration_ms=round((time.perf_counter() - started) * 1000, 1))
                raise

            log = logger.warning if response.status_code >= 400 else logger.info
            log("Request completed",
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1))
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
