"""Membership interfaces following Black Box Design principles."""
import re
from dataclasses import dataclass
from typing import List, Optional, Protocol

# Kubernetes label value syntax; the application id ends up in a label selector
_LABEL_VALUE = re.compile(r"^[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$")
_LABEL_VALUE_MAX = 63


class DiscoveryError(Exception):
    """The membership query itself failed (as opposed to finding no members)."""


@dataclass(frozen=True)
class Member:
    """One discovered worker pod."""
    name: str
    address: Optional[str] = None
    phase: Optional[str] = None

    @property
    def reachable(self) -> bool:
        """Whether the pod has been assigned an address yet."""
        return bool(self.address)


class MembershipResolver(Protocol):
    """Protocol for membership resolvers - allows swappable implementations."""

    async def resolve(self, application_id: str) -> List[Member]:
        """
        Resolve the current members of an application.

        Args:
            application_id: Application identifier (exact match)

        Returns:
            List of members, empty if the application has none

        Raises:
            ValueError: If application_id is empty or malformed
            DiscoveryError: If the query itself failed
        """
        ...


def validate_application_id(application_id: str) -> str:
    """
    Check that an application identifier can be used as a selector value.

    Raises:
        ValueError: If the identifier is empty or not a valid label value
    """
    if not application_id:
        raise ValueError("Application identifier must not be empty")
    if len(application_id) > _LABEL_VALUE_MAX or not _LABEL_VALUE.match(application_id):
        raise ValueError(f"Invalid application identifier: {application_id!r}")
    return application_id
