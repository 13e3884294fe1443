"""
Access logging middleware for the docs site.

One JSON line per request on the `docs_site.access` logger:

    {"timestamp": "...", "request_id": "...", "endpoint": "/api/page-map",
     "http_method": "GET", "http_status": 200, "latency_ms": 1.234,
     "error_code": null}

The request id is the one assigned by the app's request-id middleware
(echoed in the X-Request-ID response header).

Usage:
    app.add_middleware(AccessLoggingMiddleware)
"""

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

ERROR_CODES = {404: "NOT_FOUND", 422: "VALIDATION_ERROR"}


def error_code_for_status(http_status: int) -> Optional[str]:
    if http_status < 400:
        return None
    if http_status in ERROR_CODES:
        return ERROR_CODES[http_status]
    return "SERVER_ERROR" if http_status >= 500 else "CLIENT_ERROR"


class AccessLogger:
    def __init__(self, name: str = "docs_site.access"):
        self.logger = logging.getLogger(name)

    def entry(
        self,
        request: Request,
        request_id: str,
        http_status: int,
        started: float,
        error_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
            "endpoint": request.url.path,
            "http_method": request.method,
            "http_status": http_status,
            "latency_ms": round((time.perf_counter() - started) * 1000, 3),
            "error_code": error_code,
        }

    def write(self, entry: Dict[str, Any]) -> None:
        self.logger.info(json.dumps(entry))


class AccessLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, access_logger: Optional[AccessLogger] = None):
        super().__init__(app)
        self.access_logger = access_logger or AccessLogger()

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            request_id = request.headers.get("X-Request-ID") or "-"
            self.access_logger.write(
                self.access_logger.entry(request, request_id, 500, started, "INTERNAL_ERROR")
            )
            raise

        request_id = response.headers.get("X-Request-ID") or request.headers.get("X-Request-ID") or "-"
        self.access_logger.write(
            self.access_logger.entry(
                request, request_id, response.status_code, started, error_code_for_status(response.status_code)
            )
        )
        return response
