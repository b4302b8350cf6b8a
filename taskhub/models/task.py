"""Task data model for taskhub."""

from datetime import datetime
from pydantic import BaseModel, Field


class Task(BaseModel):
    """Canonical Task model."""

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this task")
    name: str = Field(..., description="Task name")
    description: str = Field(..., description="Task description")
    status: str = Field(..., description="Free-form task status (e.g. 'created', 'done')")
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task last update timestamp")
