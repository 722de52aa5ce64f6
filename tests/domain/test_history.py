"""Tests for the undo history stack."""

from storefront.domain.history import (
    ActionHistory,
    ActionType,
    AddAction,
    RemoveAction,
    UpdateAction,
)


class TestActionRecords:
    """Tests for action record variants."""

    def test_action_types(self, rose) -> None:
        """Each record carries its action type tag."""
        assert AddAction("rose", 1).action_type is ActionType.ADD
        assert RemoveAction("rose", rose, 2).action_type is ActionType.REMOVE
        assert UpdateAction("rose", 1, 3).action_type is ActionType.UPDATE

    def test_add_created_line(self) -> None:
        """An add with no previous quantity created the line."""
        assert AddAction("rose", 2).created_line
        assert not AddAction("rose", 2, previous_quantity=3).created_line


class TestActionHistory:
    """Tests for ActionHistory."""

    def test_empty_history(self) -> None:
        """A new history is empty and pops None."""
        history = ActionHistory()
        assert history.is_empty()
        assert history.size() == 0
        assert history.pop() is None
        assert history.peek() is None

    def test_lifo_order(self) -> None:
        """Records pop in reverse push order, each exactly once."""
        history = ActionHistory()
        first = AddAction("rose", 1)
        second = UpdateAction("rose", 1, 4)
        history.push(first)
        history.push(second)

        assert history.peek() is second
        assert history.pop() is second
        assert history.pop() is first
        assert history.pop() is None

    def test_clear_reports_count(self) -> None:
        """Clearing drops every record."""
        history = ActionHistory()
        history.push(AddAction("rose", 1))
        history.push(AddAction("tulip", 1))

        assert history.clear() == 2
        assert len(history) == 0
