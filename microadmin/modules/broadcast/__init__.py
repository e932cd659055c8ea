"""
Broadcast Module - Black Box Interface

Purpose: Fan the refresh command out to every member and aggregate the outcome
Interface: RefreshBroadcaster.broadcast(), BroadcastResult
Hidden: Concurrency bounds, per-member isolation, verdict computation

Member-level failures live inside the result; only discovery errors raise.
"""

from .broadcaster import RefreshBroadcaster
from .factory import OrchestratorFactory
from .models import BroadcastResult, DeliveryOutcome, MemberOutcome

__all__ = ["RefreshBroadcaster", "OrchestratorFactory", "BroadcastResult", "DeliveryOutcome", "MemberOutcome"]
