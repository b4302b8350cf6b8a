"""Repository for User database operations."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from taskhub.errors import NotFoundError
from taskhub.models.user import User
from taskhub.database.models import TaskDB, UserDB, fillable_fields

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get_db(self, user_id: str) -> UserDB:
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        if not user_db:
            raise NotFoundError("User", user_id)
        return user_db

    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.to_pydantic() if user_db else None

    def get_all(self) -> List[User]:
        """Get all users sorted by creation date (oldest first)."""
        users_db = self.db.query(UserDB).order_by(UserDB.created_at, UserDB.id).all()
        return [user_db.to_pydantic() for user_db in users_db]

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        return user_db.to_pydantic() if user_db else None

    def exists(self, user_id: str) -> bool:
        return self.db.query(UserDB.id).filter(UserDB.id == user_id).first() is not None

    def email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """Check whether another user already uses `email`."""
        query = self.db.query(UserDB.id).filter(UserDB.email == email)
        if exclude_id is not None:
            query = query.filter(UserDB.id != exclude_id)
        return query.first() is not None

    def create(self, fields: Dict[str, Any]) -> User:
        """Create a new user from validated fields."""
        now = datetime.utcnow()
        user_db = UserDB(**fillable_fields(UserDB, fields), created_at=now, updated_at=now)
        try:
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user_db.id}: {user_db.email}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create user: {type(e).__name__}: {str(e)}")
            raise

    def update(self, user_id: str, fields: Dict[str, Any]) -> User:
        """Apply a partial update; only fillable keys present in `fields` change."""
        user_db = self._get_db(user_id)
        for key, value in fillable_fields(UserDB, fields).items():
            setattr(user_db, key, value)
        user_db.updated_at = datetime.utcnow()

        try:
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Updated user {user_id}: {user_db.email}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, user_id: str) -> User:
        """Delete a user and the tasks they own. Returns the deleted user."""
        user_db = self._get_db(user_id)
        user = user_db.to_pydantic()
        try:
            # Explicit so the cascade holds even when the DB does not enforce foreign keys.
            self.db.query(TaskDB).filter(TaskDB.user_id == user_id).delete(synchronize_session=False)
            self.db.delete(user_db)
            self.db.commit()
            logger.debug(f"Deleted user {user_id}")
            return user
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {type(e).__name__}: {str(e)}")
            raise
