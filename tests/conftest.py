"""
Shared pytest fixtures for Microadmin tests.

This module provides common fixtures including:
- FakeResolver: canned membership snapshots or discovery failures
- FakeTransport: per-address delivery receipts with a call log
- Pod builders mimicking kubernetes client V1Pod objects
"""

import os
import sys
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from microadmin.modules.membership import DiscoveryError, Member
from microadmin.modules.transport import DeliveryReceipt


# =============================================================================
# Membership fakes
# =============================================================================

class FakeResolver:
    """
    Resolver returning a fixed member list, or raising a fixed error.

    Usage:
        resolver = FakeResolver([Member("a", "10.0.0.1")])
        members = await resolver.resolve("producer")
    """

    def __init__(self, members: Optional[List[Member]] = None, error: Optional[Exception] = None):
        self.members = list(members or [])
        self.error = error
        self.calls: List[str] = []

    async def resolve(self, application_id: str) -> List[Member]:
        self.calls.append(application_id)
        if self.error is not None:
            raise self.error
        return list(self.members)


# =============================================================================
# Transport fakes
# =============================================================================

@dataclass
class FakeTransport:
    """
    Transport returning a receipt per address.

    Addresses not in ``receipts`` are delivered successfully. Addresses
    in ``raises`` raise the mapped exception instead of returning.
    """
    receipts: Dict[str, DeliveryReceipt] = field(default_factory=dict)
    raises: Dict[str, Exception] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)
    closed: bool = False

    def fail(self, address: str, status_code: Optional[int] = 500) -> "FakeTransport":
        self.receipts[address] = DeliveryReceipt(
            ok=False, status_code=status_code, error=f"Unexpected status code {status_code}"
        )
        return self

    async def deliver(self, address: str) -> DeliveryReceipt:
        self.calls.append(address)
        if address in self.raises:
            raise self.raises[address]
        return self.receipts.get(address, DeliveryReceipt(ok=True, status_code=200))

    async def aclose(self) -> None:
        self.closed = True


# =============================================================================
# Kubernetes object builders
# =============================================================================

def make_pod(name: str, pod_ip: Optional[str], phase: Optional[str] = "Running"):
    """Build an object shaped like kubernetes.client.V1Pod."""
    return SimpleNamespace(
        metadata=SimpleNamespace(name=name),
        status=SimpleNamespace(pod_ip=pod_ip, phase=phase),
    )


def make_pod_list(*pods):
    """Build an object shaped like kubernetes.client.V1PodList."""
    return SimpleNamespace(items=list(pods))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def scenario_members() -> List[Member]:
    """Three pods: reachable, not yet addressed, reachable."""
    return [
        Member(name="a", address="10.0.0.1"),
        Member(name="b", address=""),
        Member(name="c", address="10.0.0.3"),
    ]


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def failing_resolver() -> FakeResolver:
    return FakeResolver(error=DiscoveryError("connection refused"))
