"""
FastAPI application entry point for the council site.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from council_site.routes import admin_router, api_router, site_router

logger = logging.getLogger(__name__)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"success": False, "error": "Invalid request"}, status_code=400)


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        {"success": False, "error": "Internal server error"}, status_code=500
    )


def create_app() -> FastAPI:
    app = FastAPI(title="Council Site Backend", version="0.1.0")
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled_error)

    app.include_router(api_router, prefix="/api")
    app.include_router(admin_router, prefix="/admin")
    # The catch-all shadows anything registered after it.
    app.include_router(site_router)
    return app


app = create_app()
