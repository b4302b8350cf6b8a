"""FastAPI dependencies that resolve path ids to entities.

A missing entity raises `NotFoundError` before the handler body runs; the app
turns it into an empty 404 response.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from taskhub.database.database import get_db
from taskhub.database.repository import TaskRepository
from taskhub.database.user_repository import UserRepository
from taskhub.errors import NotFoundError
from taskhub.models.task import Task
from taskhub.models.user import User


def get_user_or_404(user_id: str, db: Session = Depends(get_db)) -> User:
    """Resolve the `{user_id}` path parameter to a User."""
    user = UserRepository(db).get(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def get_task_or_404(task_id: str, db: Session = Depends(get_db)) -> Task:
    """Resolve the `{task_id}` path parameter to a Task."""
    task = TaskRepository(db).get(task_id)
    if task is None:
        raise NotFoundError("Task", task_id)
    return task
