import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_service.adapters.secondary.database.orm import InventoryItemModel
from inventory_service.core.domain.errors import NotFoundError, PersistenceError, ValidationError
from inventory_service.core.domain.models import InventoryItem
from inventory_service.core.ports.repository import ItemRepositoryPort

logger = logging.getLogger(__name__)


class SqlItemRepository(ItemRepositoryPort):
    """
    Inventory repository over a SQLAlchemy session.

    Each mutation is committed on its own. Any SQLAlchemyError rolls the
    session back and is re-raised as PersistenceError.
    """

    def __init__(self, db_session: Session):
        self.db = db_session

    @contextmanager
    def _statement(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error during {operation}: {e}")
            raise PersistenceError(f"Database error during {operation}") from e

    def _find(self, item_id: int) -> Optional[InventoryItemModel]:
        return self.db.query(InventoryItemModel).filter(InventoryItemModel.id == item_id).first()

    def insert(self, name: str, description: str = "", photo: Optional[str] = None) -> int:
        if not name:
            raise ValidationError("Missing inventory name")

        db_item = InventoryItemModel(name=name, description=description or "", photo=photo)
        with self._statement("insert"):
            self.db.add(db_item)
            self.db.commit()
            self.db.refresh(db_item)
        return db_item.id

    def get_by_id(self, item_id: int) -> Optional[InventoryItem]:
        with self._statement("select"):
            db_item = self._find(item_id)
            if db_item:
                return InventoryItem.model_validate(db_item)
        return None

    def list_all(self) -> List[InventoryItem]:
        with self._statement("select"):
            items = self.db.query(InventoryItemModel).order_by(InventoryItemModel.id).all()
            return [InventoryItem.model_validate(item) for item in items]

    def update_partial(
        self,
        item_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> InventoryItem:
        with self._statement("update"):
            db_item = self._find(item_id)
            if db_item is None:
                raise NotFoundError("Item not found")

            # None and "" both mean "keep the stored value"
            if name:
                db_item.name = name
            if description:
                db_item.description = description

            self.db.commit()
            self.db.refresh(db_item)
            return InventoryItem.model_validate(db_item)

    def set_photo(self, item_id: int, storage_name: str) -> InventoryItem:
        with self._statement("photo update"):
            db_item = self._find(item_id)
            if db_item is None:
                raise NotFoundError("Item not found")

            db_item.photo = storage_name
            self.db.commit()
            self.db.refresh(db_item)
            return InventoryItem.model_validate(db_item)

    def delete(self, item_id: int) -> Optional[InventoryItem]:
        with self._statement("delete"):
            db_item = self._find(item_id)
            if db_item is None:
                return None

            deleted = InventoryItem.model_validate(db_item)
            self.db.delete(db_item)
            self.db.commit()
            return deleted
