"""
Membership Module - Black Box Interface

Purpose: Answer "which pods currently belong to application X?"
Interface: MembershipResolver.resolve(), create_core_api()
Hidden: Kubernetes client construction, label selectors, pod status parsing

Can be replaced with any discovery mechanism (DNS, Consul, static lists).
"""

from .interfaces import DiscoveryError, Member, MembershipResolver, validate_application_id
from .k8s import KubernetesMembershipResolver, create_core_api

__all__ = [
    "DiscoveryError",
    "Member",
    "MembershipResolver",
    "KubernetesMembershipResolver",
    "create_core_api",
    "validate_application_id",
]
