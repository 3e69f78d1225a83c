# storefront/data/seed.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import ProductModel, UserModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ADMIN_SUBJECT = "seed-admin"

SAMPLE_PRODUCTS = [
    {
        "name": "Linen Shirt",
        "slug": "linen-shirt",
        "category": "tops",
        "price": 4999,
        "stock": 25,
        "sizes": ["S", "M", "L", "XL"],
        "images": ["https://cdn.example.com/products/linen-shirt.jpg"],
        "is_featured": True,
    },
    {
        "name": "Wool Scarf",
        "slug": "wool-scarf",
        "category": "accessories",
        "price": 2500,
        "stock": 40,
        "sizes": [],
        "images": ["https://cdn.example.com/products/wool-scarf.jpg"],
    },
    {
        "name": "Canvas Sneakers",
        "slug": "canvas-sneakers",
        "category": "shoes",
        "price": 7900,
        "stock": 3,
        "sizes": ["40", "41", "42", "43"],
        "images": ["https://cdn.example.com/products/canvas-sneakers.jpg"],
    },
]


def seed(db: Session) -> bool:
    """Seeds an admin and a few products. Only seeds an empty catalog."""
    if db.execute(select(ProductModel.id)).first():
        return False

    if not db.execute(select(UserModel).where(UserModel.subject == ADMIN_SUBJECT)).first():
        db.add(UserModel(subject=ADMIN_SUBJECT, email="admin@example.com", role="admin"))

    for data in SAMPLE_PRODUCTS:
        db.add(ProductModel(**data))
    db.commit()
    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} products and admin {ADMIN_SUBJECT}")
    return True


if __name__ == "__main__":
    from storefront.api.deps import create_access_token

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
    print(f"Admin token: {create_access_token(ADMIN_SUBJECT, 'admin@example.com')}")
