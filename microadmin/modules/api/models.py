"""
Microadmin API data models.

These models define the JSON bodies returned by the API. The refresh
trigger itself answers in plain text.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..membership import Member


class MemberView(BaseModel):
    """One member of an application as seen by the API."""

    name: str = Field(..., description="Pod name")
    address: Optional[str] = Field(None, description="Pod IP, empty until assigned")
    phase: Optional[str] = Field(None, description="Pod phase")
    reachable: bool = Field(..., description="Whether a refresh would be attempted")

    @classmethod
    def from_member(cls, member: Member) -> "MemberView":
        return cls(
            name=member.name,
            address=member.address,
            phase=member.phase,
            reachable=member.reachable,
        )


class MemberListResponse(BaseModel):
    """Current member snapshot of an application."""

    app_name: str
    members: List[MemberView]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status", pattern="^(healthy|unhealthy)$")
    default_application: Optional[str] = None
    version: str = Field(default="1.0.0", description="API version")
