# storefront/domain/schemas.py
from datetime import datetime
from typing import Any, List, Literal, Optional, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
ORDER_STATUSES = get_args(OrderStatus)

PaymentMethod = Literal["cod", "card"]
Role = Literal["customer", "admin"]

# integer columns are 32-bit
MAX_INT = 2**31 - 1


class CamelModel(BaseModel):
    """Wire format is camelCase; python side stays snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class Identity(BaseModel):
    """Verified caller passed explicitly into every service call."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: Role = "customer"
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


# ---------- Orders ----------

class ShippingAddress(CamelModel):
    full_name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address_line1: str = Field(..., min_length=1)
    address_line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)


class OrderItem(CamelModel):
    """Line item as submitted and as snapshotted into the order."""

    product_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("productId", "product", "product_id"),
    )
    name: str = Field(..., min_length=1)
    slug: Optional[str] = None
    size: Optional[str] = None
    quantity: int = Field(..., gt=0, le=MAX_INT, strict=True)
    # unit price in minor units
    price: int = Field(
        ...,
        ge=0,
        le=MAX_INT,
        strict=True,
        validation_alias=AliasChoices("price", "unitPrice", "unit_price"),
    )
    image: Optional[str] = None


class OrderCreate(CamelModel):
    items: List[OrderItem] = Field(..., min_length=1)
    total_price: int = Field(..., gt=0, le=MAX_INT, strict=True)
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = "cod"
    is_paid: bool = False


class OrderOut(CamelModel):
    id: str
    user_id: str
    items: List[OrderItem]
    total_price: int
    shipping_address: ShippingAddress
    status: OrderStatus
    payment_method: PaymentMethod
    is_paid: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderEnvelope(CamelModel):
    order: OrderOut


class OrdersEnvelope(CamelModel):
    orders: List[OrderOut]


class StatusUpdate(CamelModel):
    # checked against ORDER_STATUSES in the service, after the admin check
    status: Any = None


# ---------- Catalog ----------

class ProductIn(CamelModel):
    name: str = Field(..., min_length=1)
    slug: Optional[str] = None
    description: str = ""
    category: str = "uncategorized"
    price: int = Field(..., gt=0, le=MAX_INT, strict=True)
    stock: int = Field(0, le=MAX_INT, strict=True)
    images: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    is_featured: bool = False

    @field_validator("stock")
    @classmethod
    def clamp_stock(cls, v: int) -> int:
        return max(0, v)


class ProductOut(CamelModel):
    id: str
    name: str
    slug: str
    description: str
    category: str
    price: int
    stock: int
    images: List[str]
    sizes: List[str]
    is_featured: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductEnvelope(CamelModel):
    product: ProductOut


class ProductsEnvelope(CamelModel):
    products: List[ProductOut]


# ---------- Cart ----------

class CartLine(CamelModel):
    product_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("productId", "product_id"),
    )
    name: str = ""
    slug: Optional[str] = None
    size: Optional[str] = None
    quantity: int = Field(..., gt=0, le=MAX_INT, strict=True)
    price: int = Field(
        ...,
        ge=0,
        le=MAX_INT,
        strict=True,
        validation_alias=AliasChoices("price", "unitPrice", "unit_price"),
    )
    image: Optional[str] = None


class CartQuantityIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    size: Optional[str] = None
    # raw value from the quantity control, may be junk
    quantity: Any = None


class CartTotals(CamelModel):
    count: int
    subtotal: int


class CartOut(CamelModel):
    session_id: str
    items: List[CartLine]
    count: int
    subtotal: int


class CheckoutIn(CamelModel):
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = "cod"


# ---------- Users ----------

class UserOut(CamelModel):
    id: str
    email: str
    role: Role
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(CamelModel):
    user: UserOut
