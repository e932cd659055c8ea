"""
Kubernetes-backed membership resolver.

Members are the pods of a namespace carrying the label
``<label_key>=<application_id>``. The API client is built once at
startup and passed in explicitly; nothing here touches the global
kubernetes SDK configuration.
"""

import asyncio
import logging
import os
from typing import Any, List, Optional

from kubernetes import client as k8s_client
from kubernetes import config as k8s_config

from .interfaces import DiscoveryError, Member, validate_application_id

logger = logging.getLogger(__name__)


def create_core_api(kubeconfig: Optional[str] = None, context: Optional[str] = None) -> k8s_client.CoreV1Api:
    """
    Create a CoreV1Api client.

    The kubeconfig file is tried first; when it is missing or unusable the
    in-cluster service account configuration is used instead.

    Args:
        kubeconfig: Path to a kubeconfig file
        context: Optional kubeconfig context name

    Returns:
        CoreV1Api bound to an isolated ApiClient

    Raises:
        DiscoveryError: If neither configuration source can be loaded
    """
    logger.info("Loading Kubernetes configuration", extra={"kubeconfig": kubeconfig})

    try:
        if not kubeconfig or not os.path.exists(kubeconfig):
            raise k8s_config.ConfigException(f"kubeconfig file not found: {kubeconfig}")
        api_client = k8s_config.new_client_from_config(config_file=kubeconfig, context=context)
        logger.info(f"Kubernetes client created from kubeconfig {kubeconfig}")
        return k8s_client.CoreV1Api(api_client)
    except Exception as e:
        logger.info(f"Failed to load kubeconfig ({e}), falling back to in-cluster configuration")

    configuration = k8s_client.Configuration()
    try:
        k8s_config.load_incluster_config(client_configuration=configuration)
    except k8s_config.ConfigException as e:
        raise DiscoveryError(f"Unable to load Kubernetes configuration: {e}") from e

    logger.info("Kubernetes client created from in-cluster configuration")
    return k8s_client.CoreV1Api(k8s_client.ApiClient(configuration))


class KubernetesMembershipResolver:
    """Resolve application members by listing labelled pods."""

    def __init__(
        self,
        core_api: Any,
        namespace: str = "default",
        label_key: str = "app",
        request_timeout: Optional[float] = None,
    ):
        """
        Initialize resolver.

        Args:
            core_api: CoreV1Api (or compatible) client
            namespace: Namespace the worker pods run in
            label_key: Pod label holding the application identifier
            request_timeout: Optional timeout for the list call in seconds
        """
        self.core_api = core_api
        self.namespace = namespace
        self.label_key = label_key
        self.request_timeout = request_timeout

    def label_selector(self, application_id: str) -> str:
        """Build the pod label selector for an application."""
        return f"{self.label_key}={application_id}"

    async def resolve(self, application_id: str) -> List[Member]:
        validate_application_id(application_id)
        selector = self.label_selector(application_id)

        kwargs = {"label_selector": selector}
        if self.request_timeout is not None:
            kwargs["_request_timeout"] = self.request_timeout

        try:
            # The kubernetes client is blocking
            pods = await asyncio.to_thread(
                self.core_api.list_namespaced_pod, self.namespace, **kwargs
            )
        except Exception as e:
            logger.error(
                f"Failed to list pods for selector {selector} in namespace {self.namespace}: {e}"
            )
            raise DiscoveryError(
                f"Failed to list pods for application '{application_id}': {e}"
            ) from e

        members = [self._to_member(pod) for pod in (pods.items or [])]
        logger.info(
            f"Pods listed successfully for {application_id}",
            extra={"app_name": application_id, "pod_count": len(members)},
        )
        return members

    @staticmethod
    def _to_member(pod: Any) -> Member:
        status = pod.status
        return Member(
            name=pod.metadata.name,
            address=(status.pod_ip or None) if status else None,
            phase=status.phase if status else None,
        )
