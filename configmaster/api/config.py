"""
Configuration Endpoints
"""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from configmaster.config.settings import AppProperties


def build_config_router(properties: AppProperties) -> APIRouter:
    """Create the config router bound to an already loaded AppProperties"""
    router = APIRouter(prefix="/config", tags=["config"])

    @router.get("/info", response_class=PlainTextResponse)
    def get_app_info():
        """
        Get application info

        Returns name, description and version as a single line of text.
        """
        return properties.summary()

    return router
