# storefront/api/routers/carts.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_store, get_identity, get_payment_service
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    CartLine,
    CartOut,
    CartQuantityIn,
    CheckoutIn,
    Identity,
    OrderEnvelope,
)
from storefront.services.cart_service import CartService
from storefront.services.cart_store import CartStore
from storefront.services.order_service import OrderService
from storefront.services.payment_service import PaymentService

router = APIRouter(prefix="/carts", tags=["carts"])


@router.get("/{session_id}", response_model=CartOut)
def get_cart(session_id: str, store: CartStore = Depends(get_cart_store)):
    return CartService(store).get_cart(session_id)


@router.post("/{session_id}/items", response_model=CartOut)
def add_item(session_id: str, payload: CartLine, store: CartStore = Depends(get_cart_store)):
    return CartService(store).add_item(session_id, payload)


@router.put("/{session_id}/items", response_model=CartOut)
def update_item_quantity(
    session_id: str,
    payload: CartQuantityIn,
    store: CartStore = Depends(get_cart_store),
):
    return CartService(store).update_quantity_from_input(
        session_id, payload.product_id, payload.size, payload.quantity
    )


@router.delete("/{session_id}/items", response_model=CartOut)
def remove_item(
    session_id: str,
    product_id: str = Query(..., alias="productId"),
    size: Optional[str] = Query(None),
    store: CartStore = Depends(get_cart_store),
):
    return CartService(store).remove_item(session_id, product_id, size)


@router.delete("/{session_id}", response_model=CartOut)
def clear_cart(session_id: str, store: CartStore = Depends(get_cart_store)):
    return CartService(store).clear(session_id)


@router.post("/{session_id}/checkout", response_model=OrderEnvelope, status_code=201)
def checkout(
    session_id: str,
    payload: CheckoutIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
    store: CartStore = Depends(get_cart_store),
    payment_service: PaymentService = Depends(get_payment_service),
):
    svc = CartService(store)
    try:
        order = svc.checkout(session_id, identity, payload, OrderService(db), payment_service)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return {"order": order}
