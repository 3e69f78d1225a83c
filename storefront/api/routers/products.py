# storefront/api/routers/products.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_identity
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import Identity, ProductEnvelope, ProductIn, ProductsEnvelope
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductsEnvelope)
def list_products(db: Session = Depends(get_db)):
    return {"products": ProductService(db).list_products()}


@router.get("/slug/{slug}", response_model=ProductEnvelope)
def get_product_by_slug(slug: str, db: Session = Depends(get_db)):
    try:
        return {"product": ProductService(db).get_by_slug(slug)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{product_id}", response_model=ProductEnvelope)
def get_product(product_id: str, db: Session = Depends(get_db)):
    try:
        return {"product": ProductService(db).get_product(product_id)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("", response_model=ProductEnvelope, status_code=201)
def create_product(
    payload: ProductIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    try:
        return {"product": ProductService(db).create_product(identity, payload)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{product_id}", response_model=ProductEnvelope)
def update_product(
    product_id: str,
    payload: ProductIn,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    try:
        return {"product": ProductService(db).update_product(identity, product_id, payload)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{product_id}", response_model=ProductEnvelope)
def delete_product(
    product_id: str,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    try:
        return {"product": ProductService(db).delete_product(identity, product_id)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
