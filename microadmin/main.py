#!/usr/bin/env python3
"""
Microadmin - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Registers the refresh routes on the API

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from microadmin import __version__
from microadmin.config.provider import ConfigProvider, EnvConfigProvider
from microadmin.modules.api import HealthResponse, RefreshHandler, create_refresh_router
from microadmin.modules.auth import AuthModule
from microadmin.modules.broadcast import OrchestratorFactory

logger = logging.getLogger(__name__)


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    handler: Optional[RefreshHandler] = None,
    auth_module: Optional[AuthModule] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Configuration provider (environment by default)
        handler: Refresh handler; built from configuration when omitted
        auth_module: API key verifier; built from configuration when omitted

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()
    refresh_config = config_provider.get_refresh_config()

    if auth_module is None:
        auth_config = config_provider.get_auth_config()
        auth_module = AuthModule(auth_config.api_keys, require_auth=auth_config.require_auth)

    if handler is None:
        handler = OrchestratorFactory.build(config_provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - cleanup resources on shutdown.
        """
        logger.info(
            f"Microadmin started successfully (default application: "
            f"{refresh_config.default_application})"
        )
        app.state.ready = True

        yield

        app.state.ready = False
        logger.info("Shutting down Microadmin API...")
        transport = getattr(handler, "transport", None)
        if transport is not None and hasattr(transport, "aclose"):
            await transport.aclose()
        logger.info("Microadmin API shutdown complete")

    app = FastAPI(
        title="Microadmin API",
        description="Microadmin - Broadcast configuration refreshes to worker pods",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.handler = handler
    app.state.ready = False

    app.include_router(
        create_refresh_router(handler, auth_module, refresh_config.default_application)
    )

    @app.get("/healthz")
    async def healthz():
        """
        Minimal health check endpoint for Kubernetes readiness/liveness probes.

        Returns:
            200: Service is running
        """
        return {"status": "ok"}

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """
        Readiness check.

        Returns:
            200: Startup complete, refresh routes serving
            503: Not started yet or shutting down
        """
        if not request.app.state.ready:
            return JSONResponse(status_code=503, content={"status": "unhealthy"})
        return HealthResponse(
            status="healthy",
            default_application=refresh_config.default_application,
            version=__version__,
        )

    @app.exception_handler(ValueError)
    async def validation_error_handler(request, exc):
        """Handle validation errors."""
        logger.error(f"Validation error: {exc}")
        return JSONResponse(status_code=400, content={"error": str(exc)})

    return app
