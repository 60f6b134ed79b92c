# src/duet/main.py
"""Main entry point for the Duet application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from duet.api.v1 import (
    auth_router,
    chat_history_router,
    emails_router,
    favourites_router,
    mail_users_router,
    messages_router,
    realtime_router,
    users_router,
)
from duet.core.exceptions import DuetError
from duet.core.log_config import configure_logging
from duet.core.settings import settings
from duet.db.session import create_tables
from duet.services.relay import DeliveryRelay

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Two-party chat backend with real-time delivery",
    version=settings.app_version,
)

# One relay per process; endpoints reach it through the get_relay dependency.
app.state.relay = DeliveryRelay()

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers; the web client expects them at the root.
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(messages_router)
app.include_router(emails_router)
app.include_router(mail_users_router)
app.include_router(chat_history_router)
app.include_router(favourites_router)
app.include_router(realtime_router)


def _error_response(message: object, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


@app.exception_handler(DuetError)
async def duet_error_handler(request: Request, exc: DuetError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body and parameter validation failures as 400s."""
    messages = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return _error_response(messages, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.detail, exc.status_code)


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if settings.auto_create_tables:
        create_tables()
        logger.info("Database tables created")
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "description": "Two-party chat backend with real-time delivery",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("duet.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
