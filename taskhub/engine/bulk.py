"""Bulk task operations scoped to one user.

Each operation validates every payload before touching the store. The first
invalid payload aborts the call with its own messages (short-circuit), so a
malformed batch never produces partial writes. Tasks that do not belong to
the target user are dropped from updates and deletes without being reported,
which keeps other users' task ids opaque.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from taskhub.database.repository import TaskRepository
from taskhub.errors import ValidationError
from taskhub.models.task import Task
from taskhub.validation import (
    RuleSet,
    TASK_BULK_UPDATE_RULES,
    TASK_CREATE_RULES,
    validate,
)

logger = logging.getLogger(__name__)


@dataclass
class OwnershipPartition:
    """Payloads split by whether their task belongs to the target user."""
    kept: List[Dict[str, Any]] = field(default_factory=list)
    dropped: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class BulkUpdateResult:
    """Outcome of a bulk update.

    `kept` is what was applied (and what the API returns); `dropped` holds
    payloads whose task is missing or owned by another user.
    """
    kept: List[Dict[str, Any]] = field(default_factory=list)
    dropped: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class BulkDeleteResult:
    """Outcome of a bulk delete. `requested` echoes the input ids unchanged."""
    requested: List[Any] = field(default_factory=list)
    deleted_count: int = 0


def _assign_owner(payloads: List[Dict[str, Any]], user_id: str) -> List[Dict[str, Any]]:
    return [{**payload, "user_id": user_id} for payload in payloads]


def validate_all(db: Session, payloads: List[Dict[str, Any]], rules: RuleSet) -> None:
    """Validate payloads in order, raising on the first invalid one.

    Raises:
        ValidationError: With the messages of the first failing payload.
    """
    for index, payload in enumerate(payloads):
        result = validate(payload, rules, db)
        if not result.is_valid:
            logger.info(f"Bulk payload #{index} rejected: {result.errors}")
            raise ValidationError(result.errors)


def partition_owned(db: Session, user_id: str, payloads: List[Dict[str, Any]]) -> OwnershipPartition:
    """Split payloads into those whose `id` is a task owned by `user_id` and the rest.

    Input order is preserved in both halves.
    """
    repository = TaskRepository(db)
    owned = repository.owned_ids(user_id, [str(payload["id"]) for payload in payloads])
    partition = OwnershipPartition()
    for payload in payloads:
        if str(payload["id"]) in owned:
            partition.kept.append(payload)
        else:
            partition.dropped.append(payload)
    return partition


def bulk_store(db: Session, user_id: str, payloads: List[Dict[str, Any]]) -> List[Task]:
    """Create tasks for a user, all or nothing.

    Args:
        db: Database session
        user_id: Owner of every created task (overrides any `user_id` in payloads)
        payloads: Task field mappings, in the order they should be created

    Returns:
        Created tasks in input order, with ids and timestamps assigned

    Raises:
        ValidationError: If any payload is invalid (nothing is written)
    """
    owned_payloads = _assign_owner(payloads, user_id)
    validate_all(db, owned_payloads, TASK_CREATE_RULES)

    created = TaskRepository(db).bulk_create(user_id, owned_payloads)
    logger.info(f"Stored {len(created)} tasks for user {user_id}")
    return created


def bulk_update(db: Session, user_id: str, payloads: List[Dict[str, Any]]) -> BulkUpdateResult:
    """Update a user's tasks by id.

    Payloads are validated first (each must carry an `id`). Payloads whose task
    does not exist or is owned by another user are dropped silently; the rest
    are applied one at a time in input order.

    Raises:
        ValidationError: If any payload is invalid (nothing is written)
    """
    owned_payloads = _assign_owner(payloads, user_id)
    validate_all(db, owned_payloads, TASK_BULK_UPDATE_RULES)

    partition = partition_owned(db, user_id, owned_payloads)
    if partition.dropped:
        logger.info(
            f"Dropped {len(partition.dropped)} task updates not owned by user {user_id}: "
            f"{[payload['id'] for payload in partition.dropped]}"
        )

    repository = TaskRepository(db)
    for payload in partition.kept:
        repository.update(str(payload["id"]), payload)

    logger.info(f"Updated {len(partition.kept)} tasks for user {user_id}")
    return BulkUpdateResult(kept=partition.kept, dropped=partition.dropped)


def bulk_delete(db: Session, user_id: str, task_ids: List[Any]) -> BulkDeleteResult:
    """Delete the listed tasks that belong to the user; other ids are ignored."""
    deleted_count = TaskRepository(db).bulk_delete_for_user(user_id, [str(task_id) for task_id in task_ids])
    logger.info(f"Deleted {deleted_count} of {len(task_ids)} requested tasks for user {user_id}")
    return BulkDeleteResult(requested=list(task_ids), deleted_count=deleted_count)
