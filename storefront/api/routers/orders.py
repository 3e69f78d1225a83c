# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_identity
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    Identity,
    OrderCreate,
    OrderEnvelope,
    OrdersEnvelope,
    StatusUpdate,
)
from storefront.services.order_service import OrderService
from storefront.services.order_status_service import OrderStatusService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderEnvelope, status_code=201)
def create_order(
    payload: OrderCreate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """
    Places an order: decrements stock for every line and stores the order.
    The owner is always the caller.
    """
    svc = OrderService(db)
    try:
        return {"order": svc.place_order(identity, payload)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("", response_model=OrdersEnvelope)
def list_orders(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    svc = OrderStatusService(db)
    try:
        return {"orders": svc.list_all(identity)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/mine", response_model=OrdersEnvelope)
def list_my_orders(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    svc = OrderStatusService(db)
    return {"orders": svc.list_own(identity)}


@router.get("/{order_id}", response_model=OrderEnvelope)
def get_order(
    order_id: str,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    svc = OrderStatusService(db)
    try:
        return {"order": svc.get_one(identity, order_id)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{order_id}", response_model=OrderEnvelope)
def update_order_status(
    order_id: str,
    payload: StatusUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """
    Admin only. Any of the five statuses may be set from any other.
    """
    svc = OrderStatusService(db)
    try:
        return {"order": svc.set_status(identity, order_id, payload.status)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
