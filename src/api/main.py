from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.actions import exports, filing, health, readiness
from core.errors import FilingError, describe_validation_errors
from core.log import configure_logging
from filingkit import __version__

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Filing API", version=__version__)

    @app.exception_handler(FilingError)
    async def filing_error_handler(request: Request, exc: FilingError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422, content={"error": describe_validation_errors(exc.errors())}
        )

    app.include_router(health.router)
    app.include_router(exports.router)
    app.include_router(readiness.router)
    app.include_router(filing.router)
    return app


app = create_app()
