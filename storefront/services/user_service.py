from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import Identity, UserOut
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def resolve_user(self, subject: str, email: str = "") -> UserModel:
        """Find the app user for a verified subject, creating a customer on first sight."""
        existing = self.repo.get_by_subject(subject)
        if existing:
            return existing

        user = UserModel(subject=subject, email=(email or "").strip().lower(), role="customer")
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            # another request created it first
            self.repo.db.rollback()
            return self.repo.get_by_subject(subject)
        logger.info(f"Created user {created.id} for subject {subject}")
        return created

    def resolve_identity(self, subject: str, email: str = "") -> Identity:
        user = self.resolve_user(subject, email)
        return Identity(id=user.id, role=user.role, email=user.email)

    def get_user(self, user_id: str) -> UserOut:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserOut.model_validate(user)
