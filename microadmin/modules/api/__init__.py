"""
API Module - Black Box Interface

Purpose: HTTP routing for the refresh trigger
Interface: REST API endpoints via create_refresh_router()
Hidden: Header parsing, status code mapping, response bodies

The API module only orchestrates - it contains no business logic.
All logic is delegated to the broadcast and membership modules.
"""

from .models import HealthResponse, MemberListResponse, MemberView
from .router import RefreshHandler, create_refresh_router

__all__ = [
    "HealthResponse",
    "MemberListResponse",
    "MemberView",
    "RefreshHandler",
    "create_refresh_router",
]
