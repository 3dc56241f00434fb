"""Session-scoped client state: post-login redirect and listing filters"""

from typing import Dict, List, Optional
import json
import logging

from .storage import FILTERS_KEY, REDIRECT_KEY, KeyValueStorage, StorageError

logger = logging.getLogger(__name__)


class SessionState:
    """Small helpers over session storage"""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def remember_redirect(self, path: str) -> None:
        try:
            self.storage.set_item(REDIRECT_KEY, path)
        except StorageError as e:
            logger.error(f"Error saving redirect path: {e}")

    def pop_redirect(self, default: str = "/shop/home") -> str:
        """Return and forget the saved redirect path"""
        try:
            path = self.storage.get_item(REDIRECT_KEY)
            self.storage.remove_item(REDIRECT_KEY)
        except StorageError as e:
            logger.error(f"Error reading redirect path: {e}")
            return default
        return path or default

    def save_filters(self, filters: Dict[str, List[str]]) -> None:
        try:
            self.storage.set_item(FILTERS_KEY, json.dumps(filters))
        except StorageError as e:
            logger.error(f"Error saving listing filters: {e}")

    def load_filters(self) -> Optional[Dict[str, List[str]]]:
        try:
            raw = self.storage.get_item(FILTERS_KEY)
            return json.loads(raw) if raw else None
        except (StorageError, ValueError) as e:
            logger.error(f"Error reading listing filters: {e}")
            return None
