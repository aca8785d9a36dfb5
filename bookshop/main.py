# bookshop/main.py
"""FastAPI application for the bookshop storefront and back-office.

Run with:
    uvicorn bookshop.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .admin import admin_router
from .config import Settings, get_settings
from .errors import ApiError
from .logging_setup import setup_logging
from .storefront import storefront_router

logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str, data: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": data, "message": message},
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _failure(exc.http_status, exc.display_message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _failure(exc.status_code, str(exc.detail))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first problem as the message and every field's first error in ``data``."""
    fields: Dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        key = ".".join(loc[1:]) or (loc[0] if loc else "form")
        fields.setdefault(key, error.get("msg", "Invalid value"))
    message = next(iter(fields.values()), "Invalid request")
    return _failure(422, message, fields)


class _QuietHealthFilter(logging.Filter):
    """Drop uvicorn access-log records for the health probe."""

    def filter(self, record: logging.LogRecord) -> bool:
        return '"GET / ' not in record.getMessage()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Bookshop service ready, backend at %s", settings.api_url)
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    application = FastAPI(
        title="Bookshop storefront & back-office",
        description=(
            "Catalogue browsing, contact form and back-office management "
            "on top of the bookshop REST backend."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    application.state.settings = settings

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(ApiError, api_error_handler)
    application.add_exception_handler(StarletteHTTPException, http_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)

    @application.get("/")
    def health_check():
        return {"status": "ok", "message": "Bookshop service live"}

    application.include_router(storefront_router)
    application.include_router(admin_router)

    logging.getLogger("uvicorn.access").addFilter(_QuietHealthFilter())
    return application


app = create_app()
