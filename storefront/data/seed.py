# storefront/data/seed.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal, dialect_insert, init_db
from storefront.data.models.product import ProductModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {"name": "Oversize T-Shirt", "description": "Cotton", "price": Decimal("249.90"), "image": "/tshirt.jpg"},
    {"name": "High Waist Jeans", "description": "Denim trousers", "price": Decimal("499.00"), "image": "/tshirt.jpg"},
    {"name": "Sneakers", "description": "Comfortable", "price": Decimal("799.00"), "image": "/tshirt.jpg"},
    {"name": "Leather Shoulder Bag", "description": "Stylish bag", "price": Decimal("699.00"), "image": "/tshirt.jpg"},
]


def seed_products(db: Session, products=DEMO_PRODUCTS) -> int:
    """
    Inserts the catalogue, skipping products whose name already exists.
    Returns the number of inserted rows.
    """
    insert = dialect_insert(db)
    table = ProductModel.__table__
    now = datetime.now(timezone.utc)

    inserted = 0
    #distinct timestamps keep the newest-first listing stable
    for offset, data in enumerate(products):
        stmt = (
            insert(table)
            .values(created_at=now + timedelta(milliseconds=offset), **data)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        inserted += db.execute(stmt).rowcount
    db.commit()
    return inserted


def seed():
    init_db()
    db = SessionLocal()
    try:
        inserted = seed_products(db)
        logger.info(f"Seeded {inserted} products ({len(DEMO_PRODUCTS) - inserted} already present)")
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
