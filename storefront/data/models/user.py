import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class UserModel(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # uid issued by the identity provider
    subject = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, default="", index=True)
    role = Column(String, nullable=False, default="customer")  # customer, admin

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)
