"""
FastAPI application for the SatLayer documentation site.

Serves the layout/navigation configuration, page sources and generated
contract bindings consumed by the docs frontend. Every error response uses
the ErrorResponse envelope and carries the request id.
"""
import logging
import os
import uuid
from contextvars import ContextVar
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docs_site.public.middleware.access_logging import AccessLoggingMiddleware
from docs_site.public.routes import bindings, health, pages
from docs_site.public.schemas import ErrorResponse
from docs_site.public.settings import settings
from docs_site.startup import prepare_content_dir

REQUEST_ID_HEADER = "X-Request-ID"

# Request id of the request being served; '-' outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdLogFilter(logging.Filter):
    def filter(self, record):
        record.trace_id = request_id_var.get()
        return True


def configure_logging() -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="[%(trace_id)s] %(levelname)s %(name)s: %(message)s")
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIdLogFilter) for f in handler.filters):
            handler.addFilter(RequestIdLogFilter())


configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.site_title,
    description="Layout, navigation, page sources and generated contract bindings.",
    version=settings.api_version,
    docs_url="/docs",
    redoc_url=None,
    openapi_url="/openapi.json",
)


@app.get("/")
def root():
    return {"name": settings.site_title, "status": "running"}


@app.on_event("startup")
def _prepare_content():
    prepare_content_dir(settings.content_dir)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.trace_id = request_id
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


if settings.enable_access_logging:
    app.add_middleware(AccessLoggingMiddleware)

for module in (health, pages, bindings):
    app.include_router(module.router)


def error_envelope(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    detail: Optional[Any] = None,
) -> JSONResponse:
    error = {"code": code, "message": message}
    if detail is not None:
        error["detail"] = detail
    trace_id = getattr(request.state, "trace_id", None) or request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    body = ErrorResponse(trace_id=trace_id, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(HTTPException)
async def on_http_exception(request: Request, exc: HTTPException):
    if isinstance(exc.detail, dict):
        detail = dict(exc.detail)
        code = str(detail.pop("code", exc.status_code))
        message = str(detail.pop("message", code))
        return error_envelope(request, exc.status_code, code, message, detail or None)
    return error_envelope(request, exc.status_code, str(exc.detail), str(exc.detail))


@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    return error_envelope(
        request, 422, "REQUEST_VALIDATION_ERROR", "Request validation failed", jsonable_encoder(exc.errors())
    )


@app.exception_handler(Exception)
async def on_unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return error_envelope(request, 500, "INTERNAL_ERROR", "An unexpected error occurred.")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docs_site.public.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
    )
