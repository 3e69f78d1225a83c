# storefront/services/product_service.py
import re
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import ForbiddenError, NotFoundError
from storefront.domain.schemas import Identity, ProductIn, ProductOut
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def slugify(text: str) -> str:
    """Convert text to URL-friendly slug."""
    text = text.lower().strip()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_-]+', '-', text)
    return text.strip('-') or "product"


class ProductService:
    """Catalog reads are public, writes are admin only."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self) -> List[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.list_products()]

    def get_product(self, product_id: str) -> ProductOut:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found.")
        return ProductOut.model_validate(product)

    def get_by_slug(self, slug: str) -> ProductOut:
        product = self.repo.get_by_slug(slug)
        if not product:
            raise NotFoundError("Product not found.")
        return ProductOut.model_validate(product)

    def _unique_slug(self, base: str, exclude_id: str | None = None) -> str:
        base = slugify(base)
        candidate = base
        suffix = 0
        while self.repo.slug_exists(candidate, exclude_id=exclude_id):
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate

    def create_product(self, identity: Identity, payload: ProductIn) -> ProductOut:
        if not identity.is_admin:
            raise ForbiddenError("Forbidden: admin access required")

        product = ProductModel(
            name=payload.name,
            slug=self._unique_slug(payload.slug or payload.name),
            description=payload.description,
            category=payload.category,
            price=payload.price,
            stock=payload.stock,
            images=list(payload.images),
            sizes=list(payload.sizes),
            is_featured=payload.is_featured,
        )
        created = self.repo.create_product(product)
        logger.info(f"Product {created.id} ({created.slug}) created by admin {identity.id}")
        return ProductOut.model_validate(created)

    def update_product(self, identity: Identity, product_id: str, payload: ProductIn) -> ProductOut:
        if not identity.is_admin:
            raise ForbiddenError("Forbidden: admin access required")

        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found.")

        if payload.slug and payload.slug != product.slug:
            product.slug = self._unique_slug(payload.slug, exclude_id=product.id)
        product.name = payload.name
        product.description = payload.description
        product.category = payload.category
        product.price = payload.price
        # absolute restock; the order path only ever decrements
        product.stock = payload.stock
        product.images = list(payload.images)
        product.sizes = list(payload.sizes)
        product.is_featured = payload.is_featured

        updated = self.repo.save(product)
        logger.info(f"Product {product_id} updated by admin {identity.id}")
        return ProductOut.model_validate(updated)

    def delete_product(self, identity: Identity, product_id: str) -> ProductOut:
        """Removes the product; placed orders keep their item snapshots."""
        if not identity.is_admin:
            raise ForbiddenError("Forbidden: admin access required")

        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found.")

        deleted = ProductOut.model_validate(product)
        self.repo.delete_product(product)
        logger.info(f"Product {product_id} deleted by admin {identity.id}")
        return deleted
