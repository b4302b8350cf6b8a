"""Field validation for taskhub payloads."""

from taskhub.validation.rules import (
    Constraint,
    Rule,
    RuleSet,
    TASK_CREATE_RULES,
    TASK_UPDATE_RULES,
    TASK_BULK_UPDATE_RULES,
    USER_CREATE_RULES,
    USER_UPDATE_RULES,
)
from taskhub.validation.validator import ValidationResult, validate

__all__ = [
    "Constraint",
    "Rule",
    "RuleSet",
    "TASK_CREATE_RULES",
    "TASK_UPDATE_RULES",
    "TASK_BULK_UPDATE_RULES",
    "USER_CREATE_RULES",
    "USER_UPDATE_RULES",
    "ValidationResult",
    "validate",
]
