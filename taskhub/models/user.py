"""User data model for taskhub."""

from datetime import datetime
from pydantic import BaseModel, Field


class User(BaseModel):
    """User model for taskhub."""

    id: str = Field(..., description="Unique user identifier (UUID v4)")
    name: str = Field(..., description="User last name")
    firstname: str = Field(..., description="User first name")
    email: str = Field(..., description="User email address (unique)")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")
