"""Tests for TaskRepository CRUD operations."""

import pytest

from taskhub.errors import NotFoundError


class TestTaskRepository:
    """Test TaskRepository CRUD operations."""

    def test_create_task(self, task_repository, sample_task_fields, test_user_id):
        """Test creating a task assigns id and timestamps."""
        created = task_repository.create(sample_task_fields)

        assert created.id
        assert created.name == "Test Task"
        assert created.status == "created"
        assert created.user_id == test_user_id
        assert created.created_at is not None
        assert created.updated_at is not None

    def test_create_ignores_unknown_fields(self, task_repository, sample_task_fields):
        created = task_repository.create({**sample_task_fields, "id": "forced-id", "priority": 3})
        assert created.id != "forced-id"

    def test_get_task_by_id(self, task_repository, make_task):
        created = make_task()
        retrieved = task_repository.get(created.id)

        assert retrieved is not None
        assert retrieved == created

    def test_get_nonexistent_task(self, task_repository):
        assert task_repository.get("nonexistent-id") is None

    def test_get_all_and_for_user(self, task_repository, make_task, other_user_id, test_user_id):
        make_task(name="Task 1")
        make_task(name="Task 2")
        make_task(name="Task 3", user_id=other_user_id)

        assert len(task_repository.get_all()) == 3
        mine = task_repository.get_for_user(test_user_id)
        assert sorted(t.name for t in mine) == ["Task 1", "Task 2"]
        assert task_repository.get_for_user("nobody") == []

    def test_update_task(self, task_repository, make_task):
        created = make_task()

        updated = task_repository.update(created.id, {"name": "Updated", "status": "done"})

        assert updated.name == "Updated"
        assert updated.status == "done"
        assert updated.description == created.description
        assert updated.updated_at >= created.updated_at

    def test_update_nonexistent_task_raises(self, task_repository):
        with pytest.raises(NotFoundError, match="Task.*not found"):
            task_repository.update("nonexistent-id", {"name": "x"})

    def test_delete_task(self, task_repository, make_task):
        created = make_task()

        deleted = task_repository.delete(created.id)

        assert deleted.id == created.id
        assert task_repository.get(created.id) is None

    def test_delete_nonexistent_task_raises(self, task_repository):
        with pytest.raises(NotFoundError):
            task_repository.delete("nonexistent-id")

    def test_exists_owned(self, task_repository, make_task, test_user_id, other_user_id):
        created = make_task()
        assert task_repository.exists_owned(created.id, test_user_id) is True
        assert task_repository.exists_owned(created.id, other_user_id) is False
        assert task_repository.exists_owned("nonexistent-id", test_user_id) is False

    def test_owned_ids(self, task_repository, make_task, test_user_id, other_user_id):
        mine = make_task()
        theirs = make_task(user_id=other_user_id)

        owned = task_repository.owned_ids(test_user_id, [mine.id, theirs.id, "nonexistent-id", mine.id])
        assert owned == {mine.id}
        assert task_repository.owned_ids(test_user_id, []) == set()

    def test_bulk_create_keeps_input_order(self, task_repository, test_user_id):
        payloads = [
            {"name": f"Bulk {i}", "description": "d", "status": "created"}
            for i in range(3)
        ]
        created = task_repository.bulk_create(test_user_id, payloads)

        assert [t.name for t in created] == ["Bulk 0", "Bulk 1", "Bulk 2"]
        assert all(t.user_id == test_user_id for t in created)
        assert len(task_repository.get_for_user(test_user_id)) == 3
        assert task_repository.bulk_create(test_user_id, []) == []

    def test_bulk_created_tasks_list_in_creation_order(self, task_repository, make_task, test_user_id):
        expected = [make_task(name="Single").id]
        for batch in range(3):
            payloads = [
                {"name": f"Batch {batch} #{i}", "description": "d", "status": "created"}
                for i in range(8)
            ]
            expected += [t.id for t in task_repository.bulk_create(test_user_id, payloads)]

        assert [t.id for t in task_repository.get_for_user(test_user_id)] == expected
        assert [t.id for t in task_repository.get_all()] == expected

    def test_bulk_delete_for_user(self, task_repository, make_task, test_user_id, other_user_id):
        mine = make_task()
        theirs = make_task(user_id=other_user_id)

        affected = task_repository.bulk_delete_for_user(test_user_id, [mine.id, theirs.id, "nonexistent-id"])

        assert affected == 1
        assert task_repository.get(mine.id) is None
        assert task_repository.get(theirs.id) is not None
        assert task_repository.bulk_delete_for_user(test_user_id, []) == 0
