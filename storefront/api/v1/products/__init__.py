"""Product module exports"""

from . import filters, router, schemas, services

__all__ = ["filters", "router", "schemas", "services"]
