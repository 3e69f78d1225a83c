from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_identity
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import Identity, UserEnvelope
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserEnvelope)
def get_me(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return {"user": service.get_user(identity.id)}
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
