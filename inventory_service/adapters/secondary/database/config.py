import logging
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from inventory_service.config.settings import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# Bound per session to the engine returned by get_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


@lru_cache
def get_engine():
    """
    Engine for the configured database, created on first use.

    Default URL is MySQL over ODBC (see Settings.sqlalchemy_url);
    set DATABASE_URL to use another engine, e.g. "sqlite:///./inventory.db".
    """
    url = get_settings().sqlalchemy_url()
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(
        url,
        connect_args=connect_args,
        pool_pre_ping=True,
        pool_recycle=300,
    )
    logger.info(f"Database engine created for dialect '{engine.dialect.name}'")
    return engine


def init_db(engine=None):
    """Create the inventory table if it does not exist."""
    from inventory_service.adapters.secondary.database.orm import InventoryItemModel

    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine, tables=[InventoryItemModel.__table__])
    logger.info(f"Table '{InventoryItemModel.__tablename__}' ready")
    return engine


def get_db():
    db = SessionLocal(bind=get_engine())
    try:
        yield db
    finally:
        db.close()
