"""Shared schema base classes"""

from .base import BaseSchema, MessageResponse

__all__ = ["BaseSchema", "MessageResponse"]
