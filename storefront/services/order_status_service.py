# storefront/services/order_status_service.py
import uuid
from typing import Any, List

from sqlalchemy.orm import Session

from storefront.domain.errors import ForbiddenError, NotFoundError, ValidationError
from storefront.domain.schemas import ORDER_STATUSES, Identity, OrderOut
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_order_id(order_id: str) -> str:
    try:
        return str(uuid.UUID(str(order_id)))
    except ValueError:
        raise ValidationError("Invalid order id parameter.")


class OrderStatusService:
    """
    Reads over persisted orders and admin-only status changes.
    Any enumerated status may be set from any other one.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = OrderRepo(db)
        self.notification_service = notification_service or NotificationService()

    def list_all(self, identity: Identity) -> List[OrderOut]:
        if not identity.is_admin:
            raise ForbiddenError("Forbidden: admin access required.")
        return [OrderOut.model_validate(o) for o in self.repo.list_orders()]

    def list_own(self, identity: Identity) -> List[OrderOut]:
        return [OrderOut.model_validate(o) for o in self.repo.list_orders_by_user(identity.id)]

    def get_one(self, identity: Identity, order_id: str) -> OrderOut:
        order = self.repo.get_order(normalize_order_id(order_id))

        if not order:
            raise NotFoundError("Order not found.")

        if not identity.is_admin and order.user_id != identity.id:
            raise ForbiddenError("Forbidden: access denied.")

        return OrderOut.model_validate(order)

    def set_status(self, identity: Identity, order_id: str, status: Any) -> OrderOut:
        if not identity.is_admin:
            raise ForbiddenError("Forbidden: admin access required.")

        order_id = normalize_order_id(order_id)

        if not isinstance(status, str) or status not in ORDER_STATUSES:
            raise ValidationError(f"Invalid status. Allowed: {', '.join(ORDER_STATUSES)}")

        updated = self.repo.update_order_status(order_id, status)
        if not updated:
            raise NotFoundError("Order not found.")

        logger.info(f"Order {order_id} status set to {status} by admin {identity.id}")

        try:
            self.notification_service.send_status_changed(updated.user_id, updated.id, status)
        except Exception as e:
            logger.warning(f"Failed to enqueue status notification for order {order_id}: {e}")

        return OrderOut.model_validate(updated)
