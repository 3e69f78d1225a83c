# storefront/main.py
from fastapi import FastAPI
import uvicorn

from storefront.api import register_exception_handlers
from storefront.api.routers import carts, health, orders, products, users
from storefront.data.database import Base, engine
from storefront.utils.logging import get_logger

# import all models before create_all
from storefront.data.models import UserModel, ProductModel, OrderModel  # noqa: F401

logger = get_logger(__name__)


def init_db(bind=engine) -> None:
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=bind)
    except Exception:
        logger.exception("Failed to create tables")
        raise
    logger.info("Database tables ready")


def create_app(create_tables: bool = True) -> FastAPI:
    if create_tables:
        init_db()

    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
