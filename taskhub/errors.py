"""Error classes for taskhub.

Each class maps to one response shape at the HTTP boundary (see `taskhub.api.app`).
"""

from __future__ import annotations

from typing import List

from taskhub.models.constants import INVALID_DATA


class TaskHubError(Exception):
    """Base exception for taskhub errors."""

    pass


class ValidationError(TaskHubError):
    """Raised when a record fails field validation."""

    code = INVALID_DATA

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class BusinessRuleError(TaskHubError):
    """Raised when valid input breaks a business rule (e.g. duplicate email)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class NotFoundError(TaskHubError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
