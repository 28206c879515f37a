"""Middleware setup for the FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)

DEV_ENVIRONMENTS = {"development", "dev", "local"}
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def get_allowed_origins(ui_url: str | None = None, environment: str = "development") -> list[str]:
    """Get list of allowed CORS origins.

    Args:
        ui_url: URL of the UI application; allowed over both http and https
        environment: Environment name (development, production, etc.)

    Returns:
        Deduplicated list of allowed origin URLs
    """
    allowed_origins: list[str] = []

    if ui_url:
        origin = ui_url.rstrip("/")
        allowed_origins.append(origin)
        if origin.startswith("http://"):
            allowed_origins.append("https://" + origin.removeprefix("http://"))
        elif origin.startswith("https://"):
            allowed_origins.append("http://" + origin.removeprefix("https://"))

    if environment.lower() in DEV_ENVIRONMENTS:
        allowed_origins.extend(DEV_ORIGINS)

    return list(dict.fromkeys(allowed_origins))


def get_cors_headers(origin: str | None, ui_url: str | None = None, environment: str = "development") -> dict[str, str]:
    """Get CORS headers for responses built outside the CORS middleware.

    Args:
        origin: The origin from the request header
        ui_url: URL of the UI application
        environment: Environment name (development, production, etc.)

    Returns:
        Dictionary of CORS headers, empty if origin is not allowed
    """
    if not origin or origin not in get_allowed_origins(ui_url, environment):
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
    }


def setup_middleware(app: FastAPI, ui_url: str | None = None, environment: str = "development") -> None:
    """Setup middleware for the FastAPI application."""
    allowed_origins = get_allowed_origins(ui_url, environment)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    logger.info("CORS enabled for origins: %s (environment=%s)", allowed_origins, environment)
