"""Tests for the shopping session: cart policies and the undo protocol."""

import random

import pytest

from storefront.application.session_service import SessionRegistry, ShoppingSession
from storefront.domain.history import ActionType, AddAction, RemoveAction, UpdateAction
from storefront.domain.value_objects import Money


@pytest.fixture
def session(catalog) -> ShoppingSession:
    return ShoppingSession("test", catalog)


def line_state(session: ShoppingSession) -> list[tuple[str, int]]:
    return [(line.product_id, line.quantity) for line in session.cart.get_items()]


class TestAddToCart:
    """Tests for ShoppingSession.add_to_cart."""

    def test_add_records_action(self, session) -> None:
        """A successful add is recorded with its previous quantity."""
        result = session.add_to_cart("2", 2)

        assert result.success
        assert result.line.quantity == 2
        assert result.record == AddAction("2", 2, previous_quantity=0)
        assert len(session.history) == 1

    def test_merge_add_records_previous_quantity(self, session) -> None:
        """Adding to an existing line remembers the quantity before."""
        session.add_to_cart("2", 2)
        result = session.add_to_cart("2", 3)

        assert result.record == AddAction("2", 3, previous_quantity=2)
        assert line_state(session) == [("2", 5)]

    def test_unknown_product(self, session) -> None:
        """Unknown products are reported, nothing is recorded."""
        result = session.add_to_cart("404")

        assert not result.success
        assert result.error_code == "PRODUCT_NOT_FOUND"
        assert session.cart.is_empty
        assert session.history.is_empty()

    def test_over_limit(self, session) -> None:
        """Quantity limit failures are reported, nothing is recorded."""
        result = session.add_to_cart("2", 100)

        assert not result.success
        assert result.error_code == "QUANTITY_LIMIT_EXCEEDED"
        assert result.details["limit"] == 99
        assert session.cart.is_empty
        assert session.history.is_empty()

    def test_invalid_quantity(self, session) -> None:
        """Non-positive quantities are reported as invalid."""
        result = session.add_to_cart("2", 0)
        assert result.error_code == "INVALID_QUANTITY"

    def test_session_limit_is_configurable(self, catalog) -> None:
        """Sessions pass their limit to the cart."""
        small = ShoppingSession("small", catalog, max_quantity=3)
        assert small.add_to_cart("2", 3).success
        assert small.add_to_cart("2", 1).error_code == "QUANTITY_LIMIT_EXCEEDED"


class TestQuantityChanges:
    """Tests for update, increment and decrement."""

    def test_change_quantity_records_update(self, session) -> None:
        """Quantity changes are recorded with old and new values."""
        session.add_to_cart("2", 2)
        result = session.change_quantity("2", 6)

        assert result.record == UpdateAction("2", old_quantity=2, new_quantity=6)
        assert line_state(session) == [("2", 6)]

    def test_noop_update_not_recorded(self, session) -> None:
        """Setting the current quantity records nothing."""
        session.add_to_cart("2", 2)
        result = session.change_quantity("2", 2)

        assert result.success
        assert result.record is None
        assert len(session.history) == 1

    def test_change_missing_line(self, session) -> None:
        """Changing a product not in the cart is reported."""
        assert session.change_quantity("2", 3).error_code == "NOT_IN_CART"

    def test_change_to_zero_rejected(self, session) -> None:
        """Zero is not a removal."""
        session.add_to_cart("2", 2)
        result = session.change_quantity("2", 0)

        assert result.error_code == "INVALID_QUANTITY"
        assert line_state(session) == [("2", 2)]

    def test_increment_and_decrement(self, session) -> None:
        """Steps move the quantity by one."""
        session.add_to_cart("2", 2)
        session.increment("2")
        assert line_state(session) == [("2", 3)]
        session.decrement("2")
        assert line_state(session) == [("2", 2)]

    def test_decrement_stops_at_one(self, session) -> None:
        """Decrementing a single unit keeps the line and records nothing."""
        session.add_to_cart("2")
        result = session.decrement("2")

        assert result.success
        assert result.record is None
        assert line_state(session) == [("2", 1)]

    def test_increment_at_limit(self, session) -> None:
        """Incrementing past the limit is rejected."""
        session.add_to_cart("2", 99)
        assert session.increment("2").error_code == "QUANTITY_LIMIT_EXCEEDED"


class TestUndo:
    """Tests for ShoppingSession.undo_last_action."""

    def test_undo_empty_history(self, session) -> None:
        """Undo with nothing recorded is a no-op."""
        result = session.undo_last_action()
        assert not result.undone
        assert result.record is None

    def test_undo_add_new_line(self, session) -> None:
        """Undoing an add that created a line removes it."""
        session.add_to_cart("1", 2)
        session.add_to_cart("2")
        total_before = session.cart.total
        size_before = session.cart.size

        session.add_to_cart("7", 4)
        result = session.undo_last_action()

        assert result.record.action_type is ActionType.ADD
        assert session.cart.size == size_before
        assert session.cart.total == total_before
        assert not session.cart.contains("7")

    def test_undo_merge_add_restores_previous_quantity(self, session) -> None:
        """Undoing a merge-add restores the prior quantity instead of removing."""
        session.add_to_cart("2", 2)
        session.add_to_cart("2", 3)

        session.undo_last_action()

        assert line_state(session) == [("2", 2)]

    def test_undo_remove_appends_line(self, session) -> None:
        """Undoing a remove re-adds the exact line at the end."""
        session.add_to_cart("1", 2)
        session.add_to_cart("2", 3)
        session.add_to_cart("7", 1)

        session.remove_from_cart("1")
        result = session.undo_last_action()

        assert isinstance(result.record, RemoveAction)
        assert line_state(session) == [("2", 3), ("7", 1), ("1", 2)]

    def test_undo_update_restores_quantity(self, session) -> None:
        """Undoing an update restores the exact prior quantity."""
        session.add_to_cart("2", 4)
        session.change_quantity("2", 9)

        session.undo_last_action()

        assert line_state(session) == [("2", 4)]

    def test_undo_is_not_recorded(self, session) -> None:
        """Each undo consumes one record and adds none."""
        session.add_to_cart("1")
        session.add_to_cart("2")

        session.undo_last_action()
        assert len(session.history) == 1
        session.undo_last_action()
        assert session.history.is_empty()
        assert session.cart.is_empty
        assert not session.undo_last_action().undone

    def test_repeated_undo_walks_back(self, session) -> None:
        """Undoing everything returns to an empty cart."""
        session.add_to_cart("1", 2)
        session.change_quantity("1", 5)
        session.add_to_cart("2")
        session.remove_from_cart("1")
        session.add_to_cart("2", 4)

        while session.undo_last_action().undone:
            pass

        assert session.cart.is_empty
        assert session.cart.total == Money.zero()

    def test_undo_after_clear_is_harmless(self, session) -> None:
        """Records whose line was cleared are consumed without effect."""
        session.add_to_cart("1", 2)
        session.change_quantity("1", 3)
        session.clear_cart()

        assert session.undo_last_action().undone
        assert session.undo_last_action().undone
        assert session.cart.is_empty

    def test_undo_remove_that_would_exceed_limit(self, session) -> None:
        """An undo the cart cannot apply is consumed and changes nothing."""
        session.add_to_cart("1", 60)
        session.remove_from_cart("1")
        session.cart.add_item(session.catalog.find_product("1"), 50)

        result = session.undo_last_action()

        assert result.undone
        assert line_state(session) == [("1", 50)]


class TestWishlist:
    """Tests for wishlist operations on the session."""

    def test_toggle_known_product(self, session) -> None:
        """Toggling flips membership."""
        assert session.toggle_wishlist("7").in_wishlist
        assert not session.toggle_wishlist("7").in_wishlist

    def test_toggle_unknown_product(self, session) -> None:
        """Unknown products cannot be wishlisted."""
        result = session.toggle_wishlist("404")
        assert result.error_code == "PRODUCT_NOT_FOUND"
        assert len(session.wishlist) == 0

    def test_move_to_cart(self, session) -> None:
        """Moving adds one unit, records it and unlists the product."""
        session.add_to_wishlist("7")
        result = session.move_to_cart("7")

        assert result.success
        assert line_state(session) == [("7", 1)]
        assert not session.wishlist.contains("7")
        assert result.record == AddAction("7", 1, previous_quantity=0)

    def test_move_to_cart_merges(self, session) -> None:
        """Moving a product already in the cart merges and undo restores."""
        session.add_to_cart("7", 2)
        session.add_to_wishlist("7")
        session.move_to_cart("7")

        assert line_state(session) == [("7", 3)]
        session.undo_last_action()
        assert line_state(session) == [("7", 2)]

    def test_move_to_cart_full_line_keeps_wishlist(self, session) -> None:
        """A failed move leaves the wishlist untouched."""
        session.add_to_cart("7", 99)
        session.add_to_wishlist("7")

        result = session.move_to_cart("7")

        assert result.error_code == "QUANTITY_LIMIT_EXCEEDED"
        assert session.wishlist.contains("7")

    def test_move_unlisted_product(self, session) -> None:
        """Only wishlisted products can be moved."""
        assert session.move_to_cart("7").error_code == "NOT_IN_WISHLIST"


class TestSessionSnapshot:
    """Tests for session snapshot save and load."""

    def test_snapshot_round_trip_clears_history(self, session, catalog) -> None:
        """Loading a snapshot restores lines and drops undo records."""
        session.add_to_cart("1", 2)
        session.add_to_cart("9", 3)
        session.add_to_wishlist("14")
        saved = session.snapshot()

        other = ShoppingSession("other", catalog)
        other.add_to_cart("2")
        report = other.load_snapshot(saved["cart"], saved["wishlist"])

        assert report.complete
        assert line_state(other) == [("1", 2), ("9", 3)]
        assert other.wishlist.items() == ["14"]
        assert other.history.is_empty()


class TestSessionRegistry:
    """Tests for SessionRegistry."""

    def test_sessions_are_isolated(self, catalog) -> None:
        """Each session id gets its own cart."""
        registry = SessionRegistry(catalog)
        registry.get_or_create("a").add_to_cart("1")

        assert registry.get_or_create("b").cart.is_empty
        assert registry.get_or_create("a").cart.size == 1
        assert len(registry) == 2

    def test_registry_settings_apply(self, catalog) -> None:
        """New sessions use the registry's limit."""
        registry = SessionRegistry(catalog, max_quantity=10)
        assert registry.get_or_create("a").cart.max_quantity == 10

    def test_discard(self, catalog) -> None:
        """Discarded sessions start over."""
        registry = SessionRegistry(catalog)
        registry.get_or_create("a").add_to_cart("1")

        assert registry.discard("a")
        assert registry.get("a") is None
        assert not registry.discard("a")


def assert_cart_invariants(session: ShoppingSession) -> None:
    """Line quantities in range, unique lines, total and size match the lines."""
    cart = session.cart
    lines = cart.get_items()
    ids = [line.product_id for line in lines]
    assert len(ids) == len(set(ids))
    assert all(1 <= line.quantity <= cart.max_quantity for line in lines)
    assert cart.size == len(lines)
    assert cart.total.amount_cents == sum(
        line.product.unit_price.amount_cents * line.quantity for line in lines
    )


class TestRandomSequences:
    """Cart invariants under random mixes of mutations and undo."""

    PRODUCT_IDS = ["1", "2", "7", "14", "404"]
    QUANTITIES = [-1, 0, 1, 2, 3, 5, 6, 10]

    @pytest.mark.parametrize("seed", range(25))
    def test_invariants_hold_after_every_step(self, catalog, seed: int) -> None:
        """Every call, accepted or rejected, leaves the cart consistent."""
        rng = random.Random(seed)
        session = ShoppingSession("random", catalog, max_quantity=5)
        expected_history = 0

        for _ in range(60):
            operation = rng.choice(
                ["add", "remove", "change", "increment", "decrement", "undo"]
            )
            product_id = rng.choice(self.PRODUCT_IDS)
            before = line_state(session)

            if operation == "undo":
                result = session.undo_last_action()
                assert result.undone == (expected_history > 0)
                expected_history = max(0, expected_history - 1)
            else:
                if operation == "add":
                    result = session.add_to_cart(product_id, rng.choice(self.QUANTITIES))
                elif operation == "remove":
                    result = session.remove_from_cart(product_id)
                elif operation == "change":
                    result = session.change_quantity(product_id, rng.choice(self.QUANTITIES))
                elif operation == "increment":
                    result = session.increment(product_id)
                else:
                    result = session.decrement(product_id)

                if not result.success:
                    assert line_state(session) == before
                if result.record is not None:
                    expected_history += 1

            assert_cart_invariants(session)
            assert len(session.history) == expected_history
