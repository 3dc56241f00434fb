"""Payments module exports"""

from . import services, mock_gateway, paypal_client

__all__ = ["services", "mock_gateway", "paypal_client"]
