# src/trip_nick/main.py
"""Main entry point for the Trip Nick application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from trip_nick.api.v1 import (
    images_router,
    lists_router,
    posts_router,
    spots_router,
    users_router,
)
from trip_nick.core.logging import configure_logging
from trip_nick.core.settings import settings
from trip_nick.services.cache import PostListingCache
from trip_nick.services.errors import (
    InternalError,
    InvalidArgumentError,
    TripNickError,
    describe_validation_errors,
)

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Travel sharing API: spots, lists and posts",
    version=settings.app_version,
)
app.state.posts_cache = PostListingCache(ttl_seconds=settings.posts_cache_ttl_seconds)

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

# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(lists_router, prefix="/api/v1")
app.include_router(spots_router, prefix="/api/v1")
app.include_router(images_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.exception_handler(TripNickError)
async def handle_trip_nick_error(request: Request, exc: TripNickError) -> JSONResponse:
    """Render a domain error as ``{success, error, detail, ...}``."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_payload()),
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Answer malformed requests with 400 ``invalid_argument``."""
    error = InvalidArgumentError(describe_validation_errors(exc.errors()))
    return JSONResponse(
        status_code=error.status_code,
        content=jsonable_encoder(error.to_payload()),
    )


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Unhandled database error on %s %s", request.method, request.url.path)
    extra = {"details": str(exc)} if settings.debug else {}
    error = InternalError("Internal server error. Please try again.", **extra)
    return JSONResponse(
        status_code=error.status_code,
        content=jsonable_encoder(error.to_payload()),
    )


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Travel sharing API: spots, lists and posts",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("trip_nick.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
