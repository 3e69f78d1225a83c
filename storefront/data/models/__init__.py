# import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel
from storefront.data.models.order import OrderModel

__all__ = ["UserModel", "ProductModel", "OrderModel"]
