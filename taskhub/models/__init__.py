"""Data models for taskhub."""

from taskhub.models.task import Task
from taskhub.models.user import User

__all__ = [
    "Task",
    "User",
]
