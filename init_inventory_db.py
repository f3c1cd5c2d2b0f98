"""
Initialize the inventory database.

This script:
1. Creates the `inventory` table
2. Optionally loads the sample items (only when the table is empty)

Run:
    python init_inventory_db.py [--seed]
"""

import argparse

from inventory_service.adapters.secondary.database.config import SessionLocal, init_db
from inventory_service.adapters.secondary.database.orm import InventoryItemModel

SAMPLE_ITEMS = [
    {"name": "Blue Lady Painting", "description": "Oil painting, size 50x70 cm"},
    {"name": "Antique Vase", "description": "Chinese vase from Ming Dynasty, 18th century"},
]


def load_sample_data(engine):
    """Loads the sample items if the table is empty."""
    print("\n📝 Loading sample items...")

    session = SessionLocal(bind=engine)
    try:
        existing_count = session.query(InventoryItemModel).count()
        if existing_count > 0:
            print(f"⚠️  {existing_count} items already exist. Skipping sample data.")
            return 0

        for data in SAMPLE_ITEMS:
            session.add(InventoryItemModel(**data))
        session.commit()

        print(f"✅ {len(SAMPLE_ITEMS)} sample items created")
        return len(SAMPLE_ITEMS)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the inventory table")
    parser.add_argument("--seed", action="store_true", help="Load sample items into an empty table")
    args = parser.parse_args(argv)

    print("🔧 Initializing inventory database...")
    engine = init_db()
    print("✅ Table created: inventory")

    if args.seed:
        load_sample_data(engine)


if __name__ == "__main__":
    main()
