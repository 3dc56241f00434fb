"""
Guest cart kept on the client before login

All access goes through LocalCart. Storage failures are logged and the
operation degrades to an empty read or a skipped write.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import json
import logging
import time

from .storage import GUEST_CART_KEY, KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000


@dataclass
class LocalCartItem:
    product_id: str
    quantity: int
    added_at: int  # epoch milliseconds

    def to_json(self) -> Dict[str, Any]:
        return {"productId": self.product_id, "quantity": self.quantity, "addedAt": self.added_at}

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "LocalCartItem":
        return cls(
            product_id=str(raw["productId"]),
            quantity=int(raw["quantity"]),
            added_at=int(raw.get("addedAt", 0)),
        )


@dataclass
class CartLimits:
    max_items: int = 50
    max_quantity: int = 100
    expiry_days: int = 30

    @classmethod
    def from_settings(cls, settings) -> "CartLimits":
        return cls(
            max_items=settings.MAX_CART_ITEMS,
            max_quantity=settings.MAX_CART_QUANTITY,
            expiry_days=settings.GUEST_CART_EXPIRY_DAYS,
        )


class LocalCart:
    """
    Guest cart store

    Args:
        storage: Persistent key-value backend
        clock: Returns the current time in seconds
        limits: Size caps and expiry window
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Optional[Callable[[], float]] = None,
        limits: Optional[CartLimits] = None,
        key: str = GUEST_CART_KEY,
    ):
        self.storage = storage
        self.clock = clock or time.time
        self.limits = limits or CartLimits()
        self.key = key

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def _read(self) -> List[LocalCartItem]:
        try:
            raw = self.storage.get_item(self.key)
            if not raw:
                return []
            items = [LocalCartItem.from_json(entry) for entry in json.loads(raw)]
        except (StorageError, OSError, ValueError, TypeError, KeyError) as e:
            logger.error(f"Error reading guest cart: {e}")
            return []

        return [item for item in items if item.quantity >= 1]

    def _write(self, items: List[LocalCartItem]) -> None:
        try:
            self.storage.set_item(self.key, json.dumps([item.to_json() for item in items]))
        except (StorageError, OSError) as e:
            logger.error(f"Error writing guest cart: {e}")

    def get(self) -> List[LocalCartItem]:
        """Current items; entries older than the expiry window are purged and the rest persisted"""
        items = self._read()
        cutoff = self._now_ms() - self.limits.expiry_days * MS_PER_DAY
        fresh = [item for item in items if item.added_at >= cutoff]

        if len(fresh) != len(items):
            logger.info(f"Purged {len(items) - len(fresh)} expired guest cart items")
            self._write(fresh)

        return fresh

    def add(self, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        """
        Add a product or increase its quantity

        Returns:
            {"success": bool, "message": str}; never raises
        """
        if quantity < 1:
            return {"success": False, "message": "Quantity must be at least 1"}

        items = self.get()
        existing = next((item for item in items if item.product_id == product_id), None)

        if existing is None and len(items) >= self.limits.max_items:
            return {
                "success": False,
                "message": f"Cart cannot contain more than {self.limits.max_items} different products",
            }

        total = sum(item.quantity for item in items)
        if total + quantity > self.limits.max_quantity:
            return {
                "success": False,
                "message": f"Cart cannot contain more than {self.limits.max_quantity} total items",
            }

        if existing:
            existing.quantity += quantity
        else:
            items.append(LocalCartItem(product_id=product_id, quantity=quantity, added_at=self._now_ms()))

        self._write(items)
        return {"success": True, "message": "Item added to cart"}

    def update(self, product_id: str, quantity: int) -> None:
        """Set a quantity; zero or less removes the entry"""
        items = self.get()
        for index, item in enumerate(items):
            if item.product_id == product_id:
                if quantity <= 0:
                    del items[index]
                else:
                    item.quantity = quantity
                self._write(items)
                return

    def remove(self, product_id: str) -> None:
        self._write([item for item in self.get() if item.product_id != product_id])

    def clear(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except (StorageError, OSError) as e:
            logger.error(f"Error clearing guest cart: {e}")

    def get_count(self) -> int:
        return sum(item.quantity for item in self.get())

    def has_items(self) -> bool:
        return len(self.get()) > 0
