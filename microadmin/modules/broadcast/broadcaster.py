import asyncio
import logging
from typing import List, Optional

from ..membership import Member, MembershipResolver
from ..transport import Transport
from .models import BroadcastResult, DeliveryOutcome, MemberOutcome

logger = logging.getLogger(__name__)


class RefreshBroadcaster:
    def __init__(
        self,
        resolver: MembershipResolver,
        transport: Transport,
        max_concurrency: int = 10,
    ):
        """
        Initialize broadcaster.

        Args:
            resolver: Membership resolver answering "who are the members of X"
            transport: Transport delivering the refresh command to one address
            max_concurrency: Max deliveries in flight (1 = sequential)
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.resolver = resolver
        self.transport = transport
        self.max_concurrency = max_concurrency

    async def broadcast(self, application_id: str) -> BroadcastResult:
        """
        Send the refresh command to every current member of an application.

        Args:
            application_id: Application identifier

        Returns:
            BroadcastResult with one outcome per member, in resolver order

        Raises:
            DiscoveryError: If membership could not be resolved (nothing is sent)
            ValueError: If application_id is invalid

        Logic:
        1. Resolve members; resolver errors propagate untouched
        2. Skip members without an address
        3. Deliver once to every other member, bounded by max_concurrency
        4. Wait for every delivery, then aggregate
        """
        members = await self.resolver.resolve(application_id)
        logger.info(
            f"Resolved {len(members)} members for application {application_id}",
            extra={"app_name": application_id, "member_count": len(members)},
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)
        slots: List[Optional[MemberOutcome]] = [None] * len(members)

        async def run(index: int, member: Member) -> None:
            async with semaphore:
                slots[index] = await self._deliver(application_id, member)

        await asyncio.gather(*(run(i, m) for i, m in enumerate(members)))

        result = BroadcastResult(application_id=application_id, outcomes=tuple(slots))
        if result.ok:
            logger.info(result.summary(), extra=result.to_dict())
        else:
            logger.error(result.summary(), extra=result.to_dict())
        return result

    async def _deliver(self, application_id: str, member: Member) -> MemberOutcome:
        if not member.reachable:
            logger.info(
                f"Pod {member.name} does not have an IP address, skipping",
                extra={"app_name": application_id, "pod_name": member.name},
            )
            return MemberOutcome(member=member, outcome=DeliveryOutcome.SKIPPED)

        try:
            receipt = await self.transport.deliver(member.address)
        except Exception as e:
            # A misbehaving transport must not take down the other deliveries
            logger.exception(f"Transport raised while refreshing pod {member.name}")
            return MemberOutcome(
                member=member,
                outcome=DeliveryOutcome.FAILED,
                error=str(e) or type(e).__name__,
            )

        if not receipt.ok:
            logger.error(
                f"Failed to send refresh request to pod {member.name}: {receipt.error}",
                extra={
                    "app_name": application_id,
                    "pod_name": member.name,
                    "pod_ip": member.address,
                    "status_code": receipt.status_code,
                },
            )
            return MemberOutcome(
                member=member,
                outcome=DeliveryOutcome.FAILED,
                status_code=receipt.status_code,
                error=receipt.error,
            )

        logger.info(
            f"Refresh request sent to pod {member.name}",
            extra={"app_name": application_id, "pod_name": member.name, "pod_ip": member.address},
        )
        return MemberOutcome(
            member=member,
            outcome=DeliveryOutcome.DELIVERED,
            status_code=receipt.status_code,
        )

    # RefreshHandler routes

    async def refresh_config(self, application_id: str) -> BroadcastResult:
        """Handle a refresh-config trigger."""
        return await self.broadcast(application_id)

    async def list_members(self, application_id: str) -> List[Member]:
        """Handle a member listing request."""
        return await self.resolver.resolve(application_id)
