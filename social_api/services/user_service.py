# ============================================================================
# FILE: social_api/services/user_service.py
# ============================================================================
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from social_api.core.exceptions import ConflictError
from social_api.core.security import PasswordHasher
from social_api.db.models.user import User
from social_api.schemas.user import UserPublic
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Persistence and uniqueness of user accounts"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, username: str, email: str, password_hash: str) -> User:
        """Create a user, failing with ConflictError if username or email is taken"""
        if not PasswordHasher.is_hash(password_hash):
            raise ValueError("Refusing to store a password that is not hashed")
        if self.find_by_username_or_email(username, email):
            raise ConflictError()

        user = User(username=username, email=email, password_hash=password_hash)
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            # A concurrent registration got past the check above
            self.db.rollback()
            logger.warning(f"Unique constraint rejected user: {username}")
            raise ConflictError()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

        self.db.refresh(user)
        logger.info(f"User created: {user.username} ({user.id})")
        return user

    def find_by_username_or_email(self, username: str, email: str) -> Optional[User]:
        return self.db.query(User).filter(
            or_(User.username == username, User.email == email)
        ).first()

    def find_by_credential_lookup(self, identifier: str) -> Optional[User]:
        """Resolve a login identifier that may be either a username or an email"""
        return self.db.query(User).filter(
            or_(User.username == identifier, User.email == identifier)
        ).first()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def delete(self, user: User) -> None:
        """Delete a user together with all of their posts"""
        try:
            self.db.delete(user)
            self.db.commit()
            logger.info(f"User deleted: {user.id}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting user: {e}")
            raise

    @staticmethod
    def to_public(user: User) -> UserPublic:
        return UserPublic.model_validate(user)
