"""Validation engine: evaluate a rule set against a client record.

Validation never raises for bad input; it returns a `ValidationResult` whose
`errors` list holds one human-readable message per failing field, in rule-set
order. Callers decide how to surface the failure.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from taskhub.database.models import TaskDB, UserDB
from taskhub.validation.rules import Constraint, Rule, RuleSet

logger = logging.getLogger(__name__)

_TABLES = {
    UserDB.__tablename__: UserDB,
    TaskDB.__tablename__: TaskDB,
}

_email_adapter = TypeAdapter(EmailStr)


@dataclass
class ValidationResult:
    """Outcome of validating one record."""
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)


def _label(field_name: str) -> str:
    return field_name.replace("_", " ")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if isinstance(value, (list, tuple, dict)) and len(value) == 0:
        return True
    return False


def _size(value: Any) -> int:
    # Lists count items; anything else is measured as text
    if isinstance(value, (list, tuple, dict)):
        return len(value)
    return len(str(value))


def _is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _email_adapter.validate_python(value)
        return True
    except PydanticValidationError:
        return False


def _model_for(table: str):
    try:
        return _TABLES[table]
    except KeyError:
        raise ValueError(f"Unknown table in validation rule: {table}")


def _check(rule: Rule, field_name: str, value: Any, present: bool, db: Optional[Session]) -> Optional[str]:
    """Return an error message if `rule` fails, else None."""
    label = _label(field_name)
    constraint = rule.constraint

    if constraint == Constraint.REQUIRED:
        if not present or _is_blank(value):
            return f"The {label} field is required."
        return None

    if constraint == Constraint.FILLED:
        if present and _is_blank(value):
            return f"The {label} field must have a value."
        return None

    # Remaining constraints only apply to supplied, non-null values
    if not present or value is None:
        return None

    if constraint == Constraint.MAX:
        if _size(value) > rule.arg:
            return f"The {label} must not be greater than {rule.arg} characters."
        return None

    if constraint == Constraint.EMAIL:
        if not _is_email(value):
            return f"The {label} must be a valid email address."
        return None

    if constraint == Constraint.EXISTS:
        model = _model_for(rule.arg)
        found = db.query(model.id).filter(model.id == str(value)).first()
        if found is None:
            return f"The selected {label} is invalid."
        return None

    if constraint == Constraint.UNIQUE:
        model = _model_for(rule.arg)
        column = getattr(model, field_name)
        taken = db.query(model.id).filter(column == value).first()
        if taken is not None:
            return f"The {label} has already been taken."
        return None

    raise ValueError(f"Unsupported constraint: {constraint}")


def validate(record: Mapping[str, Any], rules: RuleSet, db: Optional[Session] = None) -> ValidationResult:
    """Validate `record` against `rules`.

    Args:
        record: Field values supplied by the client. A key that is absent counts
            as "not present", which is what FILLED rules rely on.
        rules: Mapping of field name to the ordered rules for that field.
        db: Session used by EXISTS/UNIQUE lookups.

    Returns:
        ValidationResult with at most one message per field (first failing rule wins).
    """
    result = ValidationResult()
    for field_name, field_rules in rules.items():
        present = field_name in record
        value = record.get(field_name)
        for rule in field_rules:
            message = _check(rule, field_name, value, present, db)
            if message:
                result.add_error(message)
                break
    if not result.is_valid:
        logger.debug(f"Validation failed: {result.errors}")
    return result
