"""
Authentication Module - Black Box Interface

Purpose: Verify administrative callers
Interface: AuthModule.verify_api_key()
Hidden: Key storage format, comparison logic, audit events

Can be replaced with OAuth/OIDC or mutual TLS without touching the API.
"""

from .auth import ANONYMOUS_IDENTITY, AuthModule

__all__ = ["AuthModule", "ANONYMOUS_IDENTITY"]
