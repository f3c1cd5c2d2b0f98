"""
In-memory SQLite database for tests.
Reuses the production ORM with SQLite instead of MySQL.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory_service.adapters.secondary.database.config import Base
from inventory_service.adapters.secondary.database.orm import InventoryItemModel


# In-memory SQLite engine
# StaticPool keeps one connection open for the whole test session
TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=False  # True to debug SQL
)


# Session factory for tests
TestSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=test_engine
)


def create_test_database():
    """
    Creates every table in the test database.
    Called once at the start of the test session.
    """
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine, tables=[InventoryItemModel.__table__])
