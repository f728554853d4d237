# backend/services/users.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.users import User
from utils.errors import DuplicateIdentity, StorageFailure
from utils.hashing import DEFAULT_ROUNDS, get_password_hash, verify_password
from utils.tokenJWT import ROLE_ADMIN, ROLE_USER

logger = logging.getLogger(__name__)


class UserService:
    """Registration and credential checks for identities."""

    def __init__(self, db: Session, bcrypt_rounds: int = DEFAULT_ROUNDS):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def get_by_email(self, email: str) -> Optional[User]:
        # Emails are compared exactly as stored
        return self.db.query(User).filter(User.email == email).first()

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def register(self, email: str, password: str, name: Optional[str] = None, role: Optional[str] = None) -> User:
        """Public self-registration. The account is always created as ``user``."""
        if role and role != ROLE_USER:
            logger.warning("Ignoring requested role %r on registration of %s", role, email)
        return self._create(email, password, ROLE_USER, name)

    def create_admin(self, email: str, password: str, name: Optional[str] = "Admin User") -> User:
        return self._create(email, password, ROLE_ADMIN, name)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    def _create(self, email: str, password: str, role: str, name: Optional[str]) -> User:
        if self.get_by_email(email) is not None:
            raise DuplicateIdentity()

        user = User(
            email=email,
            password_hash=get_password_hash(password, rounds=self.bcrypt_rounds),
            role=role,
            name=name,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            self.db.rollback()
            raise DuplicateIdentity() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Creating user %s failed", email)
            raise StorageFailure() from e

        self.db.refresh(user)
        logger.info("Created %s account id=%s", role, user.id)
        return user
