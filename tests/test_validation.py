"""Tests for the field validation engine."""

import pytest

from taskhub.validation import (
    TASK_BULK_UPDATE_RULES,
    TASK_CREATE_RULES,
    TASK_UPDATE_RULES,
    USER_CREATE_RULES,
    USER_UPDATE_RULES,
    validate,
)
from taskhub.validation.rules import Constraint, Rule, max_length


class TestTaskRules:
    """Task create/update rule sets."""

    def test_valid_create(self, db_session, sample_task_fields):
        result = validate(sample_task_fields, TASK_CREATE_RULES, db_session)
        assert result.is_valid
        assert result.errors == []

    @pytest.mark.parametrize("field", ["name", "description", "status", "user_id"])
    def test_create_requires_each_field(self, db_session, sample_task_fields, field):
        record = {k: v for k, v in sample_task_fields.items() if k != field}
        result = validate(record, TASK_CREATE_RULES, db_session)
        label = field.replace("_", " ")
        assert result.errors == [f"The {label} field is required."]

    def test_create_rejects_blank_strings(self, db_session, sample_task_fields):
        result = validate({**sample_task_fields, "name": "   "}, TASK_CREATE_RULES, db_session)
        assert result.errors == ["The name field is required."]

    def test_errors_aggregate_across_fields(self, db_session):
        result = validate({}, TASK_CREATE_RULES, db_session)
        assert result.errors == [
            "The name field is required.",
            "The description field is required.",
            "The status field is required.",
            "The user id field is required.",
        ]

    def test_max_length(self, db_session, sample_task_fields):
        result = validate({**sample_task_fields, "description": "x" * 256}, TASK_CREATE_RULES, db_session)
        assert result.errors == ["The description must not be greater than 255 characters."]

        result = validate({**sample_task_fields, "description": "x" * 255}, TASK_CREATE_RULES, db_session)
        assert result.is_valid

    def test_max_length_measures_numbers_by_digits(self, db_session, sample_task_fields):
        for status in (404, 1000, 3.5):
            result = validate({**sample_task_fields, "status": status}, TASK_CREATE_RULES, db_session)
            assert result.is_valid, status

        result = validate({**sample_task_fields, "status": int("9" * 256)}, TASK_CREATE_RULES, db_session)
        assert result.errors == ["The status must not be greater than 255 characters."]

    def test_max_length_counts_list_items(self, db_session):
        rules = {"tags": (max_length(2),)}
        assert validate({"tags": ["a", "b"]}, rules, db_session).is_valid
        assert validate({"tags": ["a", "b", "c"]}, rules, db_session).errors == [
            "The tags must not be greater than 2 characters."
        ]

    def test_unknown_user_id(self, db_session, sample_task_fields):
        result = validate({**sample_task_fields, "user_id": "nobody"}, TASK_CREATE_RULES, db_session)
        assert result.errors == ["The selected user id is invalid."]

    def test_update_allows_partial_records(self, db_session):
        result = validate({"status": "done"}, TASK_UPDATE_RULES, db_session)
        assert result.is_valid

        result = validate({}, TASK_UPDATE_RULES, db_session)
        assert result.is_valid

    def test_update_rejects_present_but_empty(self, db_session):
        result = validate({"name": ""}, TASK_UPDATE_RULES, db_session)
        assert result.errors == ["The name field must have a value."]

        result = validate({"status": None}, TASK_UPDATE_RULES, db_session)
        assert result.errors == ["The status field must have a value."]

    def test_bulk_update_requires_id(self, db_session, test_user_id):
        result = validate({"user_id": test_user_id, "name": "x"}, TASK_BULK_UPDATE_RULES, db_session)
        assert result.errors == ["The id field is required."]


class TestUserRules:
    """User create/update rule sets."""

    def test_valid_create(self, db_session):
        record = {"name": "Doe", "firstname": "Alice", "email": "alice@mail.com"}
        assert validate(record, USER_CREATE_RULES, db_session).is_valid

    def test_create_rejects_taken_email(self, db_session):
        record = {"name": "Doe", "firstname": "John", "email": "john@mail.com"}
        result = validate(record, USER_CREATE_RULES, db_session)
        assert result.errors == ["The email has already been taken."]

    @pytest.mark.parametrize("email", ["not-an-email", "john@", "@mail.com", "john mail.com"])
    def test_create_rejects_malformed_email(self, db_session, email):
        record = {"name": "Doe", "firstname": "John", "email": email}
        result = validate(record, USER_CREATE_RULES, db_session)
        assert result.errors == ["The email must be a valid email address."]

    def test_update_checks_email_shape_only(self, db_session):
        # Uniqueness on update is a separate business rule, not a field rule.
        assert validate({"email": "john@mail.com"}, USER_UPDATE_RULES, db_session).is_valid
        assert not validate({"email": "bad"}, USER_UPDATE_RULES, db_session).is_valid


class TestRule:
    def test_str(self):
        assert str(max_length(255)) == "max:255"
        assert str(Rule(Constraint.REQUIRED)) == "required"

    def test_unknown_table_is_a_programming_error(self, db_session):
        rules = {"user_id": (Rule(Constraint.EXISTS, "projects"),)}
        with pytest.raises(ValueError, match="Unknown table"):
            validate({"user_id": "x"}, rules, db_session)
