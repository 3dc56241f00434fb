"""
Merge the guest cart into the server cart after login
"""

from typing import Any, Dict
import logging

from .api import ShopClient, ShopClientError
from .local_cart import LocalCart

logger = logging.getLogger(__name__)


class CartMergeError(Exception):
    """A guest cart line could not be added to the server cart"""

    def __init__(self, message: str, product_id: str, merged: int):
        super().__init__(message)
        self.message = message
        self.product_id = product_id
        self.merged = merged


async def merge_guest_cart(client: ShopClient, local_cart: LocalCart, user_id: str) -> Dict[str, Any]:
    """
    Push every guest cart line to the server cart

    The loop stops at the first failure. Lines added before it stay on the
    server and the guest cart is left untouched, so the merge can be re-run;
    re-running adds those lines again.

    Returns:
        The server cart after the merge ({} when there was nothing to merge)

    Raises:
        CartMergeError: If the server rejected a line
    """
    items = local_cart.get()
    if not items:
        return {}

    last_response: Dict[str, Any] = {}
    for merged, item in enumerate(items):
        try:
            last_response = await client.add_to_cart(user_id, item.product_id, item.quantity)
        except ShopClientError as e:
            logger.warning(f"Cart merge stopped at {item.product_id} after {merged} lines: {e.message}")
            raise CartMergeError(e.message, product_id=item.product_id, merged=merged) from e

    local_cart.clear()
    logger.info(f"Merged {len(items)} guest cart lines for user {user_id}")
    return last_response.get("data", {})
