"""
Authentication module for the microadmin API.

Administrative callers authenticate with a static API key sent in the
X-API-Key header. It's designed as a black box that can be replaced with
any auth system without affecting other modules.
"""

import logging
import secrets
from typing import Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

ANONYMOUS_IDENTITY = "anonymous"


class AuthModule:
    """
    Authentication module for validating API keys.

    Keys are configured as ``key`` or ``service:key`` entries; the service
    part becomes the caller identity recorded in audit log events.
    """

    def __init__(self, api_keys: Iterable[str], require_auth: bool = True):
        """
        Initialize auth module.

        Args:
            api_keys: Key entries in ``key`` or ``service:key`` format
            require_auth: When False every request is accepted as anonymous
        """
        self.require_auth = require_auth
        self.api_keys: Dict[str, Optional[str]] = self._parse_api_keys(api_keys)

    @staticmethod
    def _parse_api_keys(entries: Iterable[str]) -> Dict[str, Optional[str]]:
        """Parse key entries with optional service identities."""
        keys = {}
        for entry in entries:
            entry = entry.strip()
            if not entry:
                continue

            if ":" in entry:
                service, key = entry.split(":", 1)
                keys[key.strip()] = service.strip() or None
            else:
                keys[entry] = None

        return keys

    async def verify_api_key(self, api_key: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Verify an administrative API key.

        Args:
            api_key: API key from X-API-Key header

        Returns:
            Tuple of (is_valid, service_identity)
        """
        if not self.require_auth:
            return True, ANONYMOUS_IDENTITY

        if not api_key:
            return False, None

        for known_key, service_identity in self.api_keys.items():
            # Constant-time comparison; bytes so non-ASCII header values are rejected, not raised
            if secrets.compare_digest(api_key.encode("utf-8"), known_key.encode("utf-8")):
                self._log_event("api_key_verified", service_identity)
                return True, service_identity

        self._log_event("api_key_rejected", None)
        return False, None

    def _log_event(self, event_type: str, service_identity: Optional[str]) -> None:
        """Log security event for audit."""
        logger.info(
            f"Auth event: {event_type}",
            extra={"event_type": event_type, "service_identity": service_identity},
        )
