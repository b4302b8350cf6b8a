"""Request models for the taskhub API.

Every field is optional: which keys the client actually sent matters to the
validation rules (`filled` vs `required`), so handlers read these with
`model_dump(exclude_unset=True)`. Numbers are accepted for string fields and
stored as their string form, in single and bulk bodies alike.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TaskPayload(BaseModel):
    """Request body for creating or updating a single task."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: Optional[str] = Field(None, description="Task name")
    description: Optional[str] = Field(None, description="Task description")
    status: Optional[str] = Field(None, description="Free-form task status")
    user_id: Optional[str] = Field(None, description="Owning user ID")


class UserPayload(BaseModel):
    """Request body for creating or updating a user."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: Optional[str] = Field(None, description="User last name")
    firstname: Optional[str] = Field(None, description="User first name")
    email: Optional[str] = Field(None, description="User email address")


class BulkTaskItem(TaskPayload):
    """One task inside a bulk body; bulk updates address tasks by `id`."""

    id: Optional[str] = Field(None, description="Task ID (bulk update only)")


class BulkTasksRequest(BaseModel):
    """Request body for bulk store/update: `{"tasks": [{...}, ...]}`."""
    tasks: List[BulkTaskItem] = Field(default_factory=list)

    def payloads(self) -> List[Dict[str, Any]]:
        """Client-supplied fields of each task, in input order."""
        return [task.model_dump(exclude_unset=True) for task in self.tasks]


class BulkDeleteRequest(BaseModel):
    """Request body for bulk delete: `{"tasks": [id, ...]}`."""
    tasks: List[Any] = Field(default_factory=list)
