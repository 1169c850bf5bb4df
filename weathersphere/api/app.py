"""
Application factory for the WeatherSphere API.

Creates the FastAPI application with middleware, routes and the handlers
that turn domain errors into ``{"error", "details"}`` JSON bodies.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..exceptions import ConfigurationError, QueryValidationError
from .config import Settings, get_settings
from .middleware import setup_middleware
from .routes import router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Server settings; read from the environment when omitted.

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    application = FastAPI(
        title="WeatherSphere API",
        description="Thin proxy in front of the OpenWeatherMap current, forecast and air pollution APIs.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    setup_middleware(application, production=settings.is_production)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )

    @application.exception_handler(QueryValidationError)
    async def query_validation_handler(request: Request, exc: QueryValidationError):
        logger.warning(f"Rejected {request.url.path}?{request.query_params}: {exc}")
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        logger.warning(f"Invalid parameters on {request.url.path}?{request.query_params}: {details}")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid query parameters", "details": details},
        )

    @application.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "API key not configured", "details": str(exc)},
        )

    application.include_router(router)
    application.dependency_overrides[get_settings] = lambda: settings
    return application
