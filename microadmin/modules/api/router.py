"""
Refresh trigger routes for the microadmin API.

Each route maps to one method of a RefreshHandler; the handler is passed
in when the router is created at startup.
"""

import logging
from typing import List, Optional, Protocol

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import PlainTextResponse

from ..auth import AuthModule
from ..broadcast import BroadcastResult
from ..membership import DiscoveryError, Member, validate_application_id
from .models import MemberListResponse, MemberView

logger = logging.getLogger(__name__)


class RefreshHandler(Protocol):
    """One method per route served by the refresh router."""

    async def refresh_config(self, application_id: str) -> BroadcastResult:
        """Broadcast a configuration refresh to an application."""
        ...

    async def list_members(self, application_id: str) -> List[Member]:
        """Return the current members of an application."""
        ...


def create_refresh_router(
    handler: RefreshHandler,
    auth_module: AuthModule,
    default_application: str,
) -> APIRouter:
    """
    Create refresh router with injected handler and auth module.

    Args:
        handler: Object implementing the route methods
        auth_module: API key verifier
        default_application: Application refreshed when no name is given

    Returns:
        FastAPI router with refresh and membership endpoints
    """
    router = APIRouter(tags=["refresh"])

    async def verify_api_key(
        x_api_key: Optional[str] = Header(None, description="API key for authentication"),
    ) -> Optional[str]:
        """Verify API key and return service identity."""
        is_valid, service_identity = await auth_module.verify_api_key(x_api_key)
        if not is_valid:
            raise HTTPException(401, "Invalid API key")
        return service_identity

    async def run_refresh(app_name: str, identity: Optional[str]) -> PlainTextResponse:
        logger.info(f"Refresh requested for application {app_name} by {identity or 'unknown'}")
        try:
            validate_application_id(app_name)
            result = await handler.refresh_config(app_name)
        except ValueError as e:
            return PlainTextResponse(str(e), status_code=400)
        except DiscoveryError as e:
            logger.error(f"RefreshConfig::Failed to list members: {e}")
            return PlainTextResponse(str(e), status_code=502)

        if not result.ok:
            return PlainTextResponse(result.summary(), status_code=500)
        return PlainTextResponse("OK")

    @router.post("/refresh-config", response_class=PlainTextResponse)
    async def refresh_config(
        x_app_name: Optional[str] = Header(None, description="Application to refresh"),
        identity: Optional[str] = Depends(verify_api_key),
    ):
        """
        Refresh the configuration of every pod of an application.

        The application comes from the X-App-Name header, or the configured
        default application when the header is absent.

        Returns:
            200: OK, every attempted pod accepted the refresh
            400: Invalid application name
            401: Unauthorized
            500: At least one pod failed to refresh
            502: Pods could not be listed
        """
        app_name = default_application if x_app_name is None else x_app_name
        return await run_refresh(app_name, identity)

    @router.post("/refresh-config/{app_name}", response_class=PlainTextResponse)
    async def refresh_app_config(
        app_name: str,
        identity: Optional[str] = Depends(verify_api_key),
    ):
        """Refresh the configuration of every pod of the named application."""
        return await run_refresh(app_name, identity)

    @router.get("/members/{app_name}", response_model=MemberListResponse)
    async def list_members(
        app_name: str,
        identity: Optional[str] = Depends(verify_api_key),
    ):
        """
        List the current members of an application.

        Returns:
            200: Member snapshot (may be empty)
            400: Invalid application name
            401: Unauthorized
            502: Pods could not be listed
        """
        try:
            members = await handler.list_members(app_name)
        except DiscoveryError as e:
            raise HTTPException(502, str(e))

        return MemberListResponse(
            app_name=app_name,
            members=[MemberView.from_member(m) for m in members],
            count=len(members),
        )

    return router
