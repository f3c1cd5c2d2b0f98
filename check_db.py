from inventory_service.adapters.secondary.database.config import SessionLocal, get_engine
from inventory_service.adapters.secondary.database.orm import InventoryItemModel

def check_db():
    db = SessionLocal(bind=get_engine())
    try:
        items = db.query(InventoryItemModel).order_by(InventoryItemModel.id).all()
        print(f"Found {len(items)} items in the database.")
        for item in items[:5]: # Show first 5
            print(f"ID: {item.id}, Name: {item.name}, Photo: {item.photo or '-'}")
    except Exception as e:
        print(f"Error querying database: {e}")
    finally:
        db.close()

if __name__ == "__main__":
    check_db()
