"""Shopping list repository: items stored under shoppingList/<sanitized id>."""
import logging
from typing import Iterable, List

from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.domain.exceptions import ItemNotFoundError
from shopsmart.infra.Document_Store import DocumentStore
from shopsmart.logic.shopping.reconcile import sanitize_item_id
from shopsmart.utilities.constants import SHOPPING_LIST_PATH

logger = logging.getLogger(__name__)


class ShoppingRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    def load_shopping_list(self) -> List[ShoppingItem]:
        raw = self.store.get(SHOPPING_LIST_PATH) or {}
        if isinstance(raw, list):
            entries = [e for e in raw if isinstance(e, dict)]
        elif isinstance(raw, dict):
            entries = [dict(e, id=e.get('id') or key) for key, e in raw.items() if isinstance(e, dict)]
        else:
            logger.warning("Unexpected shopping list payload of type %s; ignoring", type(raw).__name__)
            entries = []
        return [ShoppingItem.from_dict(e) for e in entries]

    def get_item(self, item_id: str) -> ShoppingItem:
        key = sanitize_item_id(item_id)
        raw = self.store.get(f"{SHOPPING_LIST_PATH}/{key}") if key else None
        if not isinstance(raw, dict):
            raise ItemNotFoundError(item_id)
        return ShoppingItem.from_dict(dict(raw, id=raw.get('id') or key))

    def commit_changes(self, upserts: Iterable[ShoppingItem], delete_ids: Iterable[str]) -> None:
        """Write upserts and deletions in one atomic multi-path update."""
        updates = {}
        for item in upserts:
            key = sanitize_item_id(item.id)
            updates[f"{SHOPPING_LIST_PATH}/{key}"] = dict(item.to_dict(), id=key)
        for item_id in delete_ids:
            key = sanitize_item_id(item_id)
            updates.setdefault(f"{SHOPPING_LIST_PATH}/{key}", None)
        if updates:
            self.store.update(updates)
            logger.info("Committed shopping list changes: %d upserts, %d deletes",
                        sum(1 for v in updates.values() if v is not None),
                        sum(1 for v in updates.values() if v is None))

    def update_item(self, item: ShoppingItem) -> ShoppingItem:
        key = sanitize_item_id(item.id)
        item.id = key
        self.store.set(f"{SHOPPING_LIST_PATH}/{key}", item.to_dict())
        return item

    def delete_item(self, item_id: str) -> None:
        key = sanitize_item_id(item_id)
        if not key:
            raise ItemNotFoundError(item_id)
        self.store.remove(f"{SHOPPING_LIST_PATH}/{key}")
