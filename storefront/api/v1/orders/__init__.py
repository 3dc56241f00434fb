"""Order module exports"""

from . import router, schemas, services, state_machine, validation

__all__ = ["router", "schemas", "services", "state_machine", "validation"]
