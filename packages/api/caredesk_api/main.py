"""FastAPI application entry point for the caredesk admin API."""

import asyncio
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from caredesk.domain.interfaces.entity_repository import RepositoryError
from caredesk.domain.models.transition_error import TransitionError
from caredesk_api.api import admin
from caredesk_api.dependencies import get_backoffice
from caredesk_api.schemas import failure

# Initialize structured logger
logger = structlog.get_logger(__name__)


def get_shutdown_timeout() -> int:
    """Get shutdown timeout from environment variable.

    Returns:
        Shutdown timeout in seconds (default: 30).
    """
    return int(os.getenv("SHUTDOWN_TIMEOUT_SECONDS", "30"))


async def cleanup_resources() -> None:
    """Close the back office's external connections if it was created."""
    logger.info("shutdown_started", message="Beginning graceful shutdown")

    if get_backoffice.cache_info().currsize:
        try:
            await get_backoffice().close()
            logger.info("shutdown_resource_closed", resource="backoffice", status="success")
        except Exception as e:
            logger.warning(
                "shutdown_resource_error",
                resource="backoffice",
                error=str(e),
                status="warning",
            )

    logger.info("shutdown_completed", message="Graceful shutdown completed successfully")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """FastAPI lifespan context manager for startup and shutdown."""
    logger.info("application_startup", message="caredesk admin API starting up")
    shutdown_timeout = get_shutdown_timeout()

    yield

    logger.info("shutdown_signal_received", message="Shutdown signal received")
    try:
        await asyncio.wait_for(cleanup_resources(), timeout=shutdown_timeout)
    except asyncio.TimeoutError:
        logger.warning(
            "shutdown_timeout_exceeded",
            timeout_seconds=shutdown_timeout,
            message=f"Shutdown timeout ({shutdown_timeout}s) exceeded, forcing exit",
        )


app = FastAPI(
    title="caredesk Admin API",
    version="0.1.0",
    description="Administrative back office for the caregiving marketplace",
    lifespan=lifespan,
)


@app.exception_handler(TransitionError)
async def transition_error_handler(request: Request, exc: TransitionError) -> JSONResponse:
    """Map transition errors to the failure envelope with their status code."""
    logger.info(
        "transition_rejected",
        path=request.url.path,
        category=exc.category.value,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=failure(exc.message))


@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    logger.error("repository_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content=failure(str(exc)))


def describe_validation_error(exc: RequestValidationError) -> str:
    """Summarize the first request validation error as one message.

    A non-list value for an ``...Ids`` field reads "userIds array is required".
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    if error.get("type") == "list_type" and field.endswith("Ids"):
        return f"{field} array is required"
    if field:
        return f"Invalid value for {field}: {error.get('msg', 'invalid')}"
    return f"Invalid request body: {error.get('msg', 'invalid')}"


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map malformed request input to a 400 failure envelope."""
    message = describe_validation_error(exc)
    logger.info("request_rejected", path=request.url.path, error=message)
    return JSONResponse(status_code=400, content=failure(message))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=failure(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(admin.router, prefix="/api/admin")
