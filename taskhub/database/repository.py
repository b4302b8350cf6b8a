"""Repository layer for Task database operations."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Set
from sqlalchemy.orm import Session

from taskhub.errors import NotFoundError
from taskhub.models.task import Task
from taskhub.database.models import TaskDB, fillable_fields

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _as_unique_ids(self, task_ids: List[str]) -> List[str]:
        """Deduplicate while preserving order."""
        seen: Set[str] = set()
        unique: List[str] = []
        for task_id in task_ids:
            if task_id not in seen:
                seen.add(task_id)
                unique.append(task_id)
        return unique

    def _get_db(self, task_id: str) -> TaskDB:
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        if not task_db:
            raise NotFoundError("Task", task_id)
        return task_db

    def create(self, fields: Dict[str, Any]) -> Task:
        """Create a new task from validated fields."""
        now = datetime.utcnow()
        task_db = TaskDB(**fillable_fields(TaskDB, fields), created_at=now, updated_at=now)
        try:
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task_db.id}: {task_db.name[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task: {type(e).__name__}: {str(e)}")
            raise

    def bulk_create(self, user_id: str, payloads: List[Dict[str, Any]]) -> List[Task]:
        """Create many tasks for one user in a single transaction.

        Returns the created tasks in input order.
        """
        now = datetime.utcnow()
        tasks_db = [
            TaskDB(**{**fillable_fields(TaskDB, payload), "user_id": user_id}, created_at=now, updated_at=now)
            for payload in payloads
        ]
        if not tasks_db:
            return []
        try:
            self.db.add_all(tasks_db)
            self.db.commit()
            for task_db in tasks_db:
                self.db.refresh(task_db)
            logger.debug(f"Created {len(tasks_db)} tasks for user {user_id}")
            return [task_db.to_pydantic() for task_db in tasks_db]
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to bulk create tasks for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        return task_db.to_pydantic() if task_db else None

    def get_all(self) -> List[Task]:
        """Get all tasks in creation order."""
        tasks_db = self.db.query(TaskDB).order_by(TaskDB.seq).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def get_for_user(self, user_id: str) -> List[Task]:
        """Get all tasks owned by a user in creation order."""
        tasks_db = self.db.query(TaskDB).filter(
            TaskDB.user_id == user_id,
        ).order_by(TaskDB.seq).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def exists_owned(self, task_id: str, user_id: str) -> bool:
        """Check whether a task exists and belongs to the given user."""
        row = self.db.query(TaskDB.id).filter(
            TaskDB.id == task_id,
            TaskDB.user_id == user_id,
        ).first()
        return row is not None

    def owned_ids(self, user_id: str, task_ids: List[str]) -> Set[str]:
        """Return the subset of `task_ids` that exist and belong to the user."""
        unique_ids = self._as_unique_ids(task_ids)
        if not unique_ids:
            return set()
        return {
            row[0]
            for row in self.db.query(TaskDB.id).filter(
                TaskDB.user_id == user_id,
                TaskDB.id.in_(unique_ids),
            ).all()
        }

    def update(self, task_id: str, fields: Dict[str, Any]) -> Task:
        """Apply a partial update; only fillable keys present in `fields` change."""
        task_db = self._get_db(task_id)
        for key, value in fillable_fields(TaskDB, fields).items():
            setattr(task_db, key, value)
        task_db.updated_at = datetime.utcnow()

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task_id}: {task_db.name[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, task_id: str) -> Task:
        """Permanently delete a task by ID. Returns the deleted task."""
        task_db = self._get_db(task_id)
        task = task_db.to_pydantic()
        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return task
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise

    def bulk_delete_for_user(self, user_id: str, task_ids: List[str]) -> int:
        """Delete the given tasks that belong to the user in one statement.

        Ids that do not exist or belong to someone else are ignored.

        Returns:
            Number of deleted rows.
        """
        unique_ids = self._as_unique_ids(task_ids)
        if not unique_ids:
            return 0

        try:
            affected = (
                self.db.query(TaskDB)
                .filter(
                    TaskDB.user_id == user_id,
                    TaskDB.id.in_(unique_ids),
                )
                .delete(synchronize_session=False)
            )
            self.db.commit()
            logger.debug(f"Deleted {affected} tasks for user {user_id}")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to bulk delete tasks for user {user_id}: {type(e).__name__}: {str(e)}")
            raise
