from sqlalchemy import Column, DateTime, Integer, String, Text, func

from inventory_service.adapters.secondary.database.config import Base


class InventoryItemModel(Base):
    __tablename__ = "inventory"
    __table_args__ = {"sqlite_autoincrement": True}  # ids never reused after delete

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True, default="")
    photo = Column(String(255), nullable=True)  # storage name inside the cache directory
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<InventoryItemModel(id={self.id}, name='{self.name}', photo={self.photo})>"
