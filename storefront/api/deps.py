# storefront/api/deps.py
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import UnauthorizedError
from storefront.domain.schemas import Identity
from storefront.services.cart_store import CartStore
from storefront.services.payment_service import PaymentService
from storefront.services.user_service import UserService
from storefront.utils.settings import JWT_SECRET, JWT_ALGORITHM
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(subject: str, email: str = "", expires_minutes: int = 60 * 24) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode({"sub": subject, "email": email, "exp": expire}, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(
            token, JWT_SECRET, algorithms=[JWT_ALGORITHM], options={"require": ["exp", "sub"]}
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Unauthorized. Token expired.")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Unauthorized. Invalid or expired token.")
    if not payload.get("sub"):
        raise UnauthorizedError("Unauthorized. Token has no subject.")
    return payload


def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid Authorization header (expected Bearer token).",
        )
    try:
        claims = decode_token(credentials.credentials)
    except UnauthorizedError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise HTTPException(status_code=401, detail=str(e))

    return UserService(db).resolve_identity(claims["sub"], claims.get("email", ""))


def get_cart_store() -> CartStore:
    return CartStore()


def get_payment_service() -> PaymentService:
    return PaymentService()
