# storefront/services/cart_service.py
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from storefront.domain.cart import Cart
from storefront.domain.errors import ValidationError, format_validation_errors
from storefront.domain.schemas import MAX_INT, CartLine, CartOut, CheckoutIn, Identity, OrderCreate, OrderOut
from storefront.services.cart_store import CartStore
from storefront.services.order_service import OrderService
from storefront.services.payment_service import PaymentService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _parse_quantity(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


class CartService:
    """
    Cart use cases on top of the session cache.
    Commands (add, remove, update, clear, checkout) load, mutate and save;
    get only reads. Stock is not checked here, only at checkout.
    """

    def __init__(self, store: CartStore):
        self.store = store

    @staticmethod
    def _out(session_id: str, cart: Cart) -> CartOut:
        totals = cart.totals()
        return CartOut(
            session_id=session_id,
            items=cart.items,
            count=totals.count,
            subtotal=totals.subtotal,
        )

    # query
    def get_cart(self, session_id: str) -> CartOut:
        return self._out(session_id, self.store.load(session_id))

    # commands
    def add_item(self, session_id: str, item: CartLine) -> CartOut:
        cart = self.store.load(session_id)
        cart.add(item)
        self.store.save(session_id, cart)
        logger.info(f"Added {item.quantity} x {item.product_id} (size={item.size}) to cart {session_id}")
        return self._out(session_id, cart)

    def remove_item(self, session_id: str, product_id: str, size: str | None = None) -> CartOut:
        cart = self.store.load(session_id)
        cart.remove(product_id, size)
        self.store.save(session_id, cart)
        return self._out(session_id, cart)

    def set_quantity(self, session_id: str, product_id: str, size: str | None, quantity: int) -> CartOut:
        cart = self.store.load(session_id)
        cart.set_quantity(product_id, size, quantity)
        self.store.save(session_id, cart)
        return self._out(session_id, cart)

    def update_quantity_from_input(
        self, session_id: str, product_id: str, size: str | None, raw_quantity: Any
    ) -> CartOut:
        """Quantity control input: junk or out-of-range values are ignored."""
        quantity = _parse_quantity(raw_quantity)
        if quantity is None or not 0 < quantity <= MAX_INT:
            logger.debug(f"Ignoring quantity input {raw_quantity!r} for cart {session_id}")
            return self.get_cart(session_id)
        return self.set_quantity(session_id, product_id, size, quantity)

    def clear(self, session_id: str) -> CartOut:
        cart = self.store.load(session_id)
        cart.clear()
        self.store.save(session_id, cart)
        return self._out(session_id, cart)

    def checkout(
        self,
        session_id: str,
        identity: Identity,
        payload: CheckoutIn,
        order_service: OrderService,
        payment_service: PaymentService,
    ) -> OrderOut:
        """
        Submits the cart through order intake, using the cart subtotal as the
        declared total. Card payments go through the simulated charge once the
        order has validated, before intake.
        The cart is cleared only when the order is created.
        """
        cart = self.store.load(session_id)
        if cart.is_empty():
            raise ValidationError("Order items are required.")

        totals = cart.totals()
        try:
            order_in = OrderCreate(
                items=cart.to_order_items(),
                total_price=totals.subtotal,
                shipping_address=payload.shipping_address,
                payment_method=payload.payment_method,
            )
        except PydanticValidationError as e:
            raise ValidationError(format_validation_errors(e.errors())) from e

        if payload.payment_method == "card":
            is_paid = payment_service.charge_card(totals.subtotal)
            order_in = order_in.model_copy(update={"is_paid": is_paid})

        order = order_service.place_order(identity, order_in)

        cart.clear()
        self.store.save(session_id, cart)
        logger.info(f"Cart {session_id} checked out as order {order.id}")
        return order
