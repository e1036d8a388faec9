"""
ConfigMaster - FastAPI Application
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from configmaster import __version__
from configmaster.api.config import build_config_router
from configmaster.config.settings import AppProperties, Settings, load_app_properties
from configmaster.config.validation import validate_configuration
from configmaster.core.middleware import RequestLoggingMiddleware
from configmaster.utils.logging import get_api_logger, initialize_logging


def create_app(properties: Optional[AppProperties] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around an explicitly passed AppProperties

    Properties are loaded from ``settings.CONFIG_FILE`` when not given, so a
    configuration problem raises here instead of at request time.
    """
    if settings is None:
        settings = Settings()

    initialize_logging(
        settings.ENVIRONMENT,
        settings.LOG_LEVEL,
        log_to_file=settings.LOG_TO_FILE,
        log_directory=settings.LOG_DIRECTORY
    )
    startup_logger = get_api_logger()

    if properties is None:
        properties = load_app_properties(settings.CONFIG_FILE or None)
    validate_configuration(properties)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        startup_logger.info(
            "ConfigMaster starting up",
            extra={
                'environment': settings.ENVIRONMENT,
                'debug_mode': settings.DEBUG,
                'app_name': properties.name,
                'app_version': properties.version,
                'event_type': 'application_startup'
            }
        )
        yield
        startup_logger.info(
            "ConfigMaster shutting down",
            extra={
                'environment': settings.ENVIRONMENT,
                'event_type': 'application_shutdown'
            }
        )

    app = FastAPI(
        title="ConfigMaster API",
        description="Externalized application configuration served over HTTP",
        version=__version__,
        debug=settings.DEBUG,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )

    app.add_middleware(RequestLoggingMiddleware, log_requests=True)
    app.include_router(build_config_router(properties))

    return app
