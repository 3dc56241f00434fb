"""
Order state machine for managing order status transitions
"""

from typing import Dict, Set
from storefront.models.order import OrderStatus


class OrderStateMachine:
    """
    Manages valid order status transitions

    Orders start pending. Payment capture completes them; an admin may cancel
    a pending order. Completed and cancelled are terminal.
    """

    # Statuses that can only be reached through payment capture
    CAPTURE_ONLY = {OrderStatus.COMPLETED}

    def __init__(self):
        self.transitions: Dict[OrderStatus, Set[OrderStatus]] = {
            OrderStatus.PENDING: {
                OrderStatus.COMPLETED,
                OrderStatus.CANCELLED
            },
            OrderStatus.COMPLETED: set(),
            OrderStatus.CANCELLED: set(),
        }

    def can_transition(
        self,
        current_status: OrderStatus,
        new_status: OrderStatus
    ) -> bool:
        """
        Check if transition is valid

        Args:
            current_status: Current order status
            new_status: Desired new status

        Returns:
            True if transition is allowed
        """
        valid_transitions = self.transitions.get(current_status, set())
        return new_status in valid_transitions

    def can_set_manually(
        self,
        current_status: OrderStatus,
        new_status: OrderStatus
    ) -> bool:
        """Check if an admin may apply the transition directly"""
        return new_status not in self.CAPTURE_ONLY and self.can_transition(current_status, new_status)
