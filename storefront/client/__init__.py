"""Client-side pieces: guest cart, session state and the API client"""

from .api import ShopClient, ShopClientError
from .local_cart import CartLimits, LocalCart, LocalCartItem
from .merge import CartMergeError, merge_guest_cart
from .session import SessionState
from .storage import FileStorage, MemoryStorage, StorageError

__all__ = [
    "ShopClient",
    "ShopClientError",
    "CartLimits",
    "LocalCart",
    "LocalCartItem",
    "CartMergeError",
    "merge_guest_cart",
    "SessionState",
    "FileStorage",
    "MemoryStorage",
    "StorageError",
]
