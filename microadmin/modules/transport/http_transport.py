"""HTTP transport delivering the refresh command to a worker pod."""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

logger = logging.getLogger(__name__)


@dataclass
class DeliveryReceipt:
    """Outcome of a single delivery attempt."""
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class Transport(Protocol):
    """Protocol for delivering the refresh command to one address."""

    async def deliver(self, address: str) -> DeliveryReceipt:
        """
        Deliver the refresh command.

        Args:
            address: Network address of the target pod

        Returns:
            DeliveryReceipt; transport failures are reported, never raised
        """
        ...


class HttpTransport:
    """
    POST an empty JSON request to the pod's refresh route.

    Only a 200 response counts as delivered. Each call makes exactly
    one attempt bounded by ``timeout`` seconds.
    """

    def __init__(
        self,
        port: int = 8081,
        path: str = "/refresh-config",
        timeout: float = 5.0,
        scheme: str = "http",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.port = port
        self.path = path if path.startswith("/") else "/" + path
        self.scheme = scheme
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def url_for(self, address: str) -> str:
        """Build the refresh URL for a pod address."""
        host = address
        # IPv6 pod IPs must be bracketed inside a URL
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        return f"{self.scheme}://{host}:{self.port}{self.path}"

    async def deliver(self, address: str) -> DeliveryReceipt:
        url = self.url_for(address)
        try:
            response = await self._client.post(
                url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to send refresh request to {url}: {e!r}")
            return DeliveryReceipt(ok=False, error=str(e) or type(e).__name__)

        if response.status_code != httpx.codes.OK:
            logger.error(f"Unexpected status code {response.status_code} from {url}")
            return DeliveryReceipt(
                ok=False,
                status_code=response.status_code,
                error=f"Unexpected status code {response.status_code}",
            )

        logger.debug(f"Refresh request accepted by {url}")
        return DeliveryReceipt(ok=True, status_code=response.status_code)

    async def aclose(self) -> None:
        """Release the underlying HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
