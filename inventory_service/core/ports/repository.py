from abc import ABC, abstractmethod
from typing import List, Optional

from inventory_service.core.domain.models import InventoryItem


class ItemRepositoryPort(ABC):
    @abstractmethod
    def insert(self, name: str, description: str = "", photo: Optional[str] = None) -> int:
        pass

    @abstractmethod
    def get_by_id(self, item_id: int) -> Optional[InventoryItem]:
        pass

    @abstractmethod
    def list_all(self) -> List[InventoryItem]:
        pass

    @abstractmethod
    def update_partial(
        self,
        item_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> InventoryItem:
        pass

    @abstractmethod
    def set_photo(self, item_id: int, storage_name: str) -> InventoryItem:
        pass

    @abstractmethod
    def delete(self, item_id: int) -> Optional[InventoryItem]:
        pass
