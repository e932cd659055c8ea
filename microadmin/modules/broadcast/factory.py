"""
Refresh Orchestrator Factory following Black Box Design principles.

This factory:
- Constructs the Kubernetes client, resolver and transport from configuration
- Wires dependencies together
- Returns only the broadcaster (hiding implementation)
"""

import logging
from typing import Any, Optional

from ...config.provider import ConfigProvider
from ..membership import KubernetesMembershipResolver, create_core_api
from ..transport import HttpTransport
from .broadcaster import RefreshBroadcaster

logger = logging.getLogger(__name__)


class OrchestratorFactory:
    """
    Factory for building the refresh orchestrator.

    This is the composition root that:
    - Creates the process-wide Kubernetes client once
    - Wires resolver and transport into the broadcaster
    - Returns only the public interface
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        core_api: Optional[Any] = None,
    ) -> RefreshBroadcaster:
        """
        Build the complete refresh orchestrator.

        Args:
            config_provider: Configuration provider
            core_api: Optional pre-built CoreV1Api client

        Returns:
            RefreshBroadcaster wired to Kubernetes and HTTP delivery

        Raises:
            DiscoveryError: If no Kubernetes configuration can be loaded
        """
        kube_config = config_provider.get_kubernetes_config()
        refresh_config = config_provider.get_refresh_config()

        if core_api is None:
            core_api = create_core_api(kube_config.kubeconfig, kube_config.context)

        resolver = KubernetesMembershipResolver(
            core_api,
            namespace=kube_config.namespace,
            label_key=kube_config.label_key,
        )
        transport = HttpTransport(
            port=refresh_config.target_port,
            path=refresh_config.target_path,
            timeout=refresh_config.timeout_seconds,
        )

        logger.info(
            f"Refresh orchestrator built for namespace {kube_config.namespace} "
            f"(label {kube_config.label_key}, target port {refresh_config.target_port})"
        )
        return RefreshBroadcaster(
            resolver,
            transport,
            max_concurrency=refresh_config.max_concurrency,
        )
