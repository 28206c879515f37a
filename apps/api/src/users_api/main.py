"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from users_api.config import get_settings
from users_api.middleware import get_cors_headers, setup_middleware
from users_api.routes import api_router
from users_api.services import build_user_service
from users_api.services.cosmos_db_init import initialize_cosmos_db
from users_common.errors import BadRequestError, ServerError, UserServiceError

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle application lifespan events."""
    logger.info(f"{settings.app_name} v{settings.app_version} started")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"User store backend: {settings.user_store_backend}")

    if settings.user_store_backend == "cosmos":
        logger.info("Initializing Cosmos DB...")
        await initialize_cosmos_db(settings)

    app.state.user_service = build_user_service(settings)

    yield

    logger.info(f"{settings.app_name} shutting down")


app = FastAPI(
    title=settings.app_name,
    description="User records CRUD service",
    version=settings.app_version,
    lifespan=lifespan,
    redirect_slashes=False,
)

setup_middleware(app, ui_url=settings.ui_url, environment=settings.environment)


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten request validation errors into a single message.

    A body that is not valid JSON has no field to point at, so it gets the plain
    bad request message.
    """
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return BadRequestError.default_message

    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "bad request"


@app.exception_handler(UserServiceError)
async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    """Map domain error kinds to their status codes."""
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 with the shared error body."""
    message = format_validation_errors(exc)
    logger.info("%s %s -> 400 %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


# Responses from this handler bypass the CORS middleware, so headers are added here.
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer unexpected failures with a generic server error."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)

    origin = request.headers.get("origin")
    cors_headers = get_cors_headers(origin, ui_url=settings.ui_url, environment=settings.environment)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": ServerError.default_message},
        headers=cors_headers,
    )


app.include_router(api_router)


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "users_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
