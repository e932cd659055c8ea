"""
Transport Module - Black Box Interface

Purpose: Deliver the refresh command to a single worker pod
Interface: Transport.deliver(), DeliveryReceipt
Hidden: HTTP client, URL layout, timeouts, status interpretation

Can be replaced with any point-to-point channel (gRPC, message queue).
"""

from .http_transport import DeliveryReceipt, HttpTransport, Transport

__all__ = ["DeliveryReceipt", "HttpTransport", "Transport"]
