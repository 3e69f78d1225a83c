import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, ForeignKey

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # snapshot taken at submission, independent of later product edits
    items = Column(JSON, nullable=False)
    total_price = Column(Integer, nullable=False)  # minor units
    shipping_address = Column(JSON, nullable=False)

    status = Column(String, nullable=False, default="pending", index=True)
    payment_method = Column(String, nullable=False, default="cod")  # cod, card
    is_paid = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)
