"""
Microadmin - Configuration Refresh Orchestrator

Tells the running worker pods of an application to reload their
configuration without restarting them.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- membership: Discovers the current pods of an application
- transport: Delivers the refresh command to a single pod
- broadcast: Fans the refresh command out and aggregates the outcome
- api: REST trigger surface
- auth: API key authentication
"""

__version__ = "1.0.0"
