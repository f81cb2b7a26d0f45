from __future__ import annotations

import logging
import os
import uuid

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from collection.errors import WorkflowError
from config.settings import settings
from ops.structured_logger import setup_logging
from ops.tracing import bind_request_id, release_request_id

from app.routers.auth import router as auth_router
from app.routers.collectors import router as collectors_router
from app.routers.health import router as health_router
from app.routers.households import router as households_router
from app.routers.logs import router as logs_router
from app.routers.reports import router as reports_router
from app.routers.routes import router as routes_router

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title="Green-link API", version="1.0.0")
log = logging.getLogger("greenlink.api")


def _get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id") or ""


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    token = bind_request_id(rid)
    try:
        response = await call_next(request)
    finally:
        release_request_id(token)
    response.headers["X-Request-Id"] = rid
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    rid = _get_request_id(request)
    log.warning(
        "http_exception",
        extra={
            "extra": {
                "event": "http_exception",
                "status_code": exc.status_code,
                "detail": exc.detail,
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "request_id": rid, "revision": os.getenv("K_REVISION") or ""},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    rid = _get_request_id(request)
    log.warning(
        "validation_error",
        extra={
            "extra": {
                "event": "validation_error",
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(), "request_id": rid, "revision": os.getenv("K_REVISION") or ""},
    )


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    rid = _get_request_id(request)
    log.warning(
        "workflow_error",
        extra={
            "extra": {
                "event": "workflow_error",
                "code": exc.code,
                "status_code": exc.status_code,
                "context": exc.context,
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.code, "request_id": rid, "revision": os.getenv("K_REVISION") or ""},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    rid = _get_request_id(request)
    log.error(
        "internal_unhandled_exception",
        extra={
            "extra": {
                "event": "internal_unhandled_exception",
                "error_type": type(exc).__name__,
                "message": str(exc),
                "path": request.url.path,
                "method": request.method,
                "request_id": rid,
            }
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "internal_unhandled_exception", "request_id": rid, "revision": os.getenv("K_REVISION") or ""},
    )


# Browser clients for the admin, collector and resident pages call this API directly.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["health"])
app.include_router(auth_router, tags=["auth"])
app.include_router(households_router, prefix="/api", tags=["households"])
app.include_router(collectors_router, prefix="/api", tags=["collectors"])
app.include_router(routes_router, prefix="/api", tags=["routes"])
app.include_router(logs_router, prefix="/api", tags=["logs"])
app.include_router(reports_router, prefix="/api", tags=["reports"])
