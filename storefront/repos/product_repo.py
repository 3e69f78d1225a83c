# storefront/repos/product_repo.py
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.slug == slug)
        ).scalar_one_or_none()

    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        stmt = select(ProductModel.id).where(ProductModel.slug == slug)
        if exclude_id:
            stmt = stmt.where(ProductModel.id != exclude_id)
        return self.db.execute(stmt).first() is not None

    def list_products(self) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel).order_by(ProductModel.created_at.desc())
            ).scalars().all()
        )

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def decrement_stock(self, product_id: str, quantity: int) -> int:
        """
        Conditional decrement in one statement:
        UPDATE products SET stock = stock - :q WHERE id = :id AND stock >= :q
        Returns rowcount; 0 means missing product or not enough stock.
        Does not commit.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()
