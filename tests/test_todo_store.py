"""
Todo API — TodoStore Unit Tests
=================================

What:  Tests for the in-memory store: validation, id allocation, partial
       updates, deletion and snapshot semantics.
How:   Exercises TodoStore directly (no HTTP).
"""

from datetime import datetime, timedelta, timezone

import pytest

from todo_api.exceptions import NotFoundError, ValidationError
from todo_api.services.todo_store import TodoStore, normalize_title


class TestNormalizeTitle:
    """Tests for title trimming and rejection."""

    def test_trims_whitespace(self):
        assert normalize_title("  Trimmed  ") == "Trimmed"

    @pytest.mark.parametrize("title", [None, "", "   ", "\t\n", 123, ["a"]])
    def test_rejects_missing_blank_and_non_string(self, title):
        with pytest.raises(ValidationError, match="Title is required"):
            normalize_title(title)

    def test_custom_message(self):
        with pytest.raises(ValidationError, match="Title cannot be empty"):
            normalize_title(" ", message="Title cannot be empty")


class TestTodoStoreCreate:
    """Tests for create()."""

    def setup_method(self):
        self.now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        self.store = TodoStore(clock=lambda: self.now)

    def test_create_assigns_defaults(self):
        todo = self.store.create("  Buy milk  ")

        assert todo.id == 1
        assert todo.title == "Buy milk"
        assert todo.completed is False
        assert todo.created_at == self.now

    def test_ids_are_sequential(self):
        ids = [self.store.create(f"todo {i}").id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_ids_never_reused_after_delete(self):
        first = self.store.create("first")
        self.store.delete(first.id)

        second = self.store.create("second")
        assert second.id > first.id

    def test_invalid_title_does_not_mutate(self):
        with pytest.raises(ValidationError):
            self.store.create("   ")

        todos, count = self.store.list()
        assert todos == []
        assert count == 0
        # The failed call did not consume an id
        assert self.store.create("valid").id == 1


class TestTodoStoreRead:
    """Tests for list() and get()."""

    def setup_method(self):
        self.store = TodoStore()

    def test_list_empty(self):
        assert self.store.list() == ([], 0)

    def test_list_preserves_insertion_order(self):
        for title in ("a", "b", "c"):
            self.store.create(title)

        todos, count = self.store.list()
        assert [t.title for t in todos] == ["a", "b", "c"]
        assert count == 3

    def test_get_existing(self):
        created = self.store.create("Specific todo")
        fetched = self.store.get(created.id)

        assert fetched.id == created.id
        assert fetched.title == "Specific todo"

    def test_get_unknown_raises(self):
        with pytest.raises(NotFoundError, match="Todo not found"):
            self.store.get(99999)

    def test_returned_records_are_snapshots(self):
        created = self.store.create("original")
        created.title = "tampered"
        created.completed = True

        stored = self.store.get(created.id)
        assert stored.title == "original"
        assert stored.completed is False


class TestTodoStoreUpdate:
    """Tests for partial update()."""

    def setup_method(self):
        self.store = TodoStore()
        self.todo = self.store.create("Original")

    def test_update_completed_only_keeps_title(self):
        updated = self.store.update(self.todo.id, completed=True)

        assert updated.completed is True
        assert updated.title == "Original"

    def test_update_title_only_keeps_completed(self):
        self.store.update(self.todo.id, completed=True)
        updated = self.store.update(self.todo.id, title="  Updated ")

        assert updated.title == "Updated"
        assert updated.completed is True

    def test_update_can_uncomplete(self):
        self.store.update(self.todo.id, completed=True)
        assert self.store.update(self.todo.id, completed=False).completed is False

    def test_update_never_changes_created_at(self):
        updated = self.store.update(self.todo.id, title="New", completed=True)
        assert updated.created_at == self.todo.created_at

    def test_update_blank_title_rejected_without_changes(self):
        self.store.update(self.todo.id, completed=False)
        with pytest.raises(ValidationError, match="Title cannot be empty"):
            self.store.update(self.todo.id, title="   ", completed=True)

        stored = self.store.get(self.todo.id)
        assert stored.title == "Original"
        assert stored.completed is False

    def test_update_unknown_raises(self):
        with pytest.raises(NotFoundError):
            self.store.update(99999, completed=True)

    def test_unknown_id_reported_before_bad_title(self):
        with pytest.raises(NotFoundError):
            self.store.update(99999, title="")


class TestTodoStoreDelete:
    """Tests for delete()."""

    def setup_method(self):
        self.store = TodoStore()

    def test_delete_returns_removed_record(self):
        todo = self.store.create("To delete")
        deleted = self.store.delete(todo.id)

        assert deleted.id == todo.id
        assert deleted.title == "To delete"
        assert self.store.list() == ([], 0)

    def test_get_after_delete_raises(self):
        todo = self.store.create("Will be deleted")
        self.store.delete(todo.id)

        with pytest.raises(NotFoundError):
            self.store.get(todo.id)

    def test_delete_unknown_raises(self):
        with pytest.raises(NotFoundError):
            self.store.delete(99999)

    def test_delete_keeps_other_records_in_order(self):
        a, b, c = (self.store.create(t) for t in "abc")
        self.store.delete(b.id)

        todos, count = self.store.list()
        assert [t.id for t in todos] == [a.id, c.id]
        assert count == 2


def test_clock_is_called_per_create():
    ticks = iter(
        datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=i) for i in range(3)
    )
    store = TodoStore(clock=lambda: next(ticks))

    first = store.create("one")
    second = store.create("two")
    assert second.created_at - first.created_at == timedelta(seconds=1)
