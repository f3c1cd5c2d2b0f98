"""
Inventory item and photo lifecycle.

Rows and blobs are never written in one transaction, so every operation
orders its steps so that a row never points at a missing blob:
- register: store the blob, then insert the row
- replace photo: store the new blob, point the row at it, then drop the old blob
- delete: delete the row, then drop its blob

A blob left behind by a failed step is an orphan, never a dangling
reference. Blob deletion is best-effort: failures are logged, not raised.
"""
import logging
from typing import BinaryIO, Callable, List, Optional

from inventory_service.core.domain.errors import (
    InventoryError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from inventory_service.core.domain.models import InventoryItem, InventoryItemResponse
from inventory_service.core.ports.blob_store import BlobStorePort
from inventory_service.core.ports.repository import ItemRepositoryPort

logger = logging.getLogger(__name__)

# Exact, case-sensitive values accepted for the search `has_photo` flag
PHOTO_FLAG_VALUES = frozenset({"on", "true", "1"})


def is_flag_set(value: Optional[str]) -> bool:
    return value in PHOTO_FLAG_VALUES


def to_response(
    item: InventoryItem,
    photo_url_for: Callable[[int], str]
) -> InventoryItemResponse:
    """Copy of the item with its photo URL (None when it has no photo)."""
    photo_url = photo_url_for(item.id) if item.photo else None
    return InventoryItemResponse(**item.model_dump(), photo_url=photo_url)


class ItemService:
    def __init__(self, repository: ItemRepositoryPort, blob_store: BlobStorePort):
        self.repository = repository
        self.blob_store = blob_store

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def register_item(
        self,
        name: Optional[str],
        description: Optional[str] = None,
        photo: Optional[BinaryIO] = None,
        photo_name: Optional[str] = None
    ) -> InventoryItem:
        if not name:
            raise ValidationError("Missing inventory name")

        storage_name = self.blob_store.store(photo, photo_name) if photo is not None else None

        try:
            item_id = self.repository.insert(name, description or "", storage_name)
        except InventoryError:
            if storage_name:
                self._discard_blob(storage_name, "insert failed")
            raise

        item = self.repository.get_by_id(item_id)
        if item is None:
            # Deleted by another request right after the insert
            item = InventoryItem(id=item_id, name=name, description=description or "", photo=storage_name)

        logger.info(f"Item {item_id} registered (photo={storage_name})")
        return item

    def get_item(self, item_id: int) -> InventoryItem:
        item = self.repository.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Item not found")
        return item

    def list_items(self) -> List[InventoryItem]:
        return self.repository.list_all()

    def update_item(
        self,
        item_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> InventoryItem:
        item = self.repository.update_partial(item_id, name=name, description=description)
        logger.info(f"Item {item_id} updated")
        return item

    def delete_item(self, item_id: int) -> InventoryItem:
        deleted = self.repository.delete(item_id)
        if deleted is None:
            raise NotFoundError("Item not found")

        if deleted.photo:
            self._discard_blob(deleted.photo, f"item {item_id} deleted")

        logger.info(f"Item {item_id} deleted")
        return deleted

    def search_item(
        self,
        item_id: int,
        has_photo: Optional[str],
        photo_url_for: Callable[[int], str]
    ) -> InventoryItemResponse:
        """
        Item lookup for POST /search.

        When `has_photo` is one of PHOTO_FLAG_VALUES and the item has a photo,
        the returned description gets a "Photo: <url>" line. Only the
        response is annotated, the stored description is left as is.
        """
        result = to_response(self.get_item(item_id), photo_url_for)
        if is_flag_set(has_photo) and result.photo_url:
            result.description = f"{result.description or ''}\nPhoto: {result.photo_url}"
        return result

    # ------------------------------------------------------------------
    # Photos
    # ------------------------------------------------------------------

    def replace_photo(
        self,
        item_id: int,
        photo: Optional[BinaryIO],
        photo_name: Optional[str] = None
    ) -> InventoryItem:
        current = self.get_item(item_id)
        if photo is None:
            raise ValidationError("No photo uploaded")

        new_name = self.blob_store.store(photo, photo_name)
        try:
            updated = self.repository.set_photo(item_id, new_name)
        except InventoryError:
            # Not attached to any item: drop it
            self._discard_blob(new_name, f"photo update of item {item_id} failed")
            raise

        # Only once the new reference is committed
        if current.photo and current.photo != new_name:
            self._discard_blob(current.photo, f"replaced on item {item_id}")

        logger.info(f"Item {item_id} photo replaced: {current.photo} -> {new_name}")
        return updated

    def get_photo(self, item_id: int):
        """Path of the item's photo file."""
        item = self.get_item(item_id)
        if not item.photo:
            raise NotFoundError("Photo not found", reason=NotFoundError.NO_PHOTO)

        path = self.blob_store.resolve(item.photo)
        if path is None:
            logger.warning(f"Item {item_id} references {item.photo} but the file is missing")
            raise NotFoundError("Photo file missing", reason=NotFoundError.FILE_MISSING)
        return path

    def _discard_blob(self, storage_name: str, context: str) -> None:
        try:
            self.blob_store.remove(storage_name)
        except StorageError as e:
            logger.warning(f"Could not remove blob {storage_name} ({context}): {e}")
