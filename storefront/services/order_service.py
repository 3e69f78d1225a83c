# storefront/services/order_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.errors import (
    OutOfStockError,
    ProductNotFoundError,
    StorefrontError,
    ValidationError,
)
from storefront.domain.schemas import Identity, OrderCreate, OrderOut
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import VERIFY_ORDER_TOTAL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Order intake: validates a submitted order, decrements stock for every
    line and persists the order, all in one transaction.
    """

    def __init__(
        self,
        db: Session,
        notification_service: NotificationService | None = None,
        verify_total: bool | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.product_repo = ProductRepo(db)
        self.notification_service = notification_service or NotificationService()
        self.verify_total = VERIFY_ORDER_TOTAL if verify_total is None else verify_total

    def _check_total(self, payload: OrderCreate) -> None:
        computed = sum(i.price * i.quantity for i in payload.items)
        if computed == payload.total_price:
            return
        if self.verify_total:
            raise ValidationError(
                f"totalPrice {payload.total_price} does not match items total {computed}"
            )
        logger.warning(
            f"Declared totalPrice {payload.total_price} differs from items total {computed}, accepting declared value"
        )

    def place_order(self, identity: Identity, payload: OrderCreate) -> OrderOut:
        """
        Use case: place an order.

        1. optional total check (before any write)
        2. per line, in submission order: conditional stock decrement
        3. insert the order as pending
        4. commit, then notify

        Any failure rolls the whole transaction back, so no earlier
        decrement survives a later not-found or out-of-stock line.
        """
        self._check_total(payload)

        logger.info(
            f"Placing order for user {identity.id}: {len(payload.items)} line(s), total {payload.total_price}"
        )

        try:
            for item in payload.items:
                rowcount = self.product_repo.decrement_stock(item.product_id, item.quantity)
                if rowcount == 0:
                    product = self.product_repo.get_product(item.product_id)
                    if product is None:
                        raise ProductNotFoundError(item.name)
                    raise OutOfStockError(product.name)
                logger.info(f"Stock of product {item.product_id} decremented by {item.quantity}")

            order = OrderModel(
                user_id=identity.id,
                items=[i.model_dump(by_alias=True, exclude_none=True) for i in payload.items],
                total_price=payload.total_price,
                shipping_address=payload.shipping_address.model_dump(by_alias=True, exclude_none=True),
                status="pending",
                payment_method=payload.payment_method,
                is_paid=payload.is_paid,
            )
            self.repo.add_order(order)
            self.db.commit()

        except StorefrontError as e:
            self.db.rollback()
            logger.warning(f"Order for user {identity.id} rejected: {e}")
            raise
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Storage failure while placing order for user {identity.id}")
            raise
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Order {order.id} created for user {identity.id}")

        try:
            self.notification_service.send_order_placed(identity.id, order.id, order.total_price)
        except Exception as e:
            # the order is committed at this point
            logger.warning(f"Failed to enqueue notification for order {order.id}: {e}")

        return OrderOut.model_validate(order)
