"""Field rule definitions and the rule sets used for users and tasks."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from taskhub.models.constants import MAX_FIELD_LENGTH


class Constraint(str, Enum):
    """Constraint enumeration."""
    REQUIRED = "required"
    FILLED = "filled"
    MAX = "max"
    EMAIL = "email"
    EXISTS = "exists"
    UNIQUE = "unique"


@dataclass(frozen=True)
class Rule:
    """A constraint plus its argument (length for MAX, table name for EXISTS/UNIQUE)."""
    constraint: Constraint
    arg: Optional[Union[int, str]] = None

    def __str__(self) -> str:
        if self.arg is None:
            return self.constraint.value
        return f"{self.constraint.value}:{self.arg}"


RuleSet = Dict[str, Tuple[Rule, ...]]

REQUIRED = Rule(Constraint.REQUIRED)
FILLED = Rule(Constraint.FILLED)
EMAIL = Rule(Constraint.EMAIL)


def max_length(n: int) -> Rule:
    return Rule(Constraint.MAX, n)


def exists(table: str) -> Rule:
    return Rule(Constraint.EXISTS, table)


def unique(table: str) -> Rule:
    return Rule(Constraint.UNIQUE, table)


MAX_255 = max_length(MAX_FIELD_LENGTH)

TASK_CREATE_RULES: RuleSet = {
    "name": (REQUIRED, MAX_255),
    "description": (REQUIRED, MAX_255),
    "status": (REQUIRED, MAX_255),
    "user_id": (REQUIRED, exists("users")),
}

TASK_UPDATE_RULES: RuleSet = {
    "name": (FILLED, MAX_255),
    "description": (FILLED, MAX_255),
    "status": (FILLED, MAX_255),
    "user_id": (FILLED, exists("users")),
}

# Bulk updates address each task by id inside the payload
TASK_BULK_UPDATE_RULES: RuleSet = {
    **TASK_UPDATE_RULES,
    "id": (REQUIRED, MAX_255),
}

USER_CREATE_RULES: RuleSet = {
    "name": (REQUIRED, MAX_255),
    "firstname": (REQUIRED, MAX_255),
    "email": (REQUIRED, unique("users"), EMAIL),
}

USER_UPDATE_RULES: RuleSet = {
    "name": (FILLED, MAX_255),
    "firstname": (FILLED, MAX_255),
    "email": (FILLED, EMAIL),
}
