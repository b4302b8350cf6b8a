"""SQLAlchemy database models for taskhub."""

from datetime import datetime
import uuid
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from taskhub.database.database import Base


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    # Columns a client may write through create/update payloads
    FILLABLE = ("name", "firstname", "email")

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # User profile
    name = Column(String(255), nullable=False)
    firstname = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from taskhub.models.user import User
        return User(
            id=self.id,
            name=self.name,
            firstname=self.firstname,
            email=self.email,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    FILLABLE = ("name", "description", "status", "user_id")

    # Insertion order; rows created in one batch share a timestamp
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, unique=True, index=True, default=lambda: str(uuid.uuid4()))

    # Owner
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Basic fields
    name = Column(String(255), nullable=False)
    description = Column(String(255), nullable=False)
    status = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from taskhub.models.task import Task
        return Task(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            description=self.description,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


def fillable_fields(model, fields: dict) -> dict:
    """Keep only the keys of `fields` a client is allowed to write on `model`."""
    return {key: value for key, value in fields.items() if key in model.FILLABLE}
