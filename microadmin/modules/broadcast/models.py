"""
Broadcast result models.

A broadcast produces one MemberOutcome per resolved member and a single
BroadcastResult aggregating them. Both are immutable snapshots.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..membership import Member


class DeliveryOutcome(str, Enum):
    """Per-member outcome of a refresh broadcast."""

    DELIVERED = "delivered"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class MemberOutcome:
    """Outcome of delivering the refresh command to one member."""

    member: Member
    outcome: DeliveryOutcome
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def attempted(self) -> bool:
        return self.outcome is not DeliveryOutcome.SKIPPED


@dataclass(frozen=True)
class BroadcastResult:
    """Aggregate outcome of one broadcast invocation."""

    application_id: str
    outcomes: Tuple[MemberOutcome, ...] = ()

    def _count(self, outcome: DeliveryOutcome) -> int:
        return sum(1 for o in self.outcomes if o.outcome is outcome)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def delivered(self) -> int:
        return self._count(DeliveryOutcome.DELIVERED)

    @property
    def skipped(self) -> int:
        return self._count(DeliveryOutcome.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(DeliveryOutcome.FAILED)

    @property
    def attempted(self) -> int:
        return self.total - self.skipped

    @property
    def ok(self) -> bool:
        """Verdict: fails only when an attempted delivery failed."""
        return self.failed == 0

    def outcome_for(self, member_name: str) -> Optional[DeliveryOutcome]:
        """Look up the outcome recorded for a member by name."""
        for o in self.outcomes:
            if o.member.name == member_name:
                return o.outcome
        return None

    def summary(self) -> str:
        """Human-readable one-line summary without per-member detail."""
        if self.ok:
            return (
                f"Refresh delivered to {self.delivered} of {self.total} members of "
                f"application '{self.application_id}' ({self.skipped} skipped)"
            )
        return (
            f"Refresh failed for {self.failed} of {self.attempted} attempted members of "
            f"application '{self.application_id}' ({self.delivered} delivered, "
            f"{self.skipped} skipped)"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "application_id": self.application_id,
            "ok": self.ok,
            "total": self.total,
            "delivered": self.delivered,
            "skipped": self.skipped,
            "failed": self.failed,
        }
