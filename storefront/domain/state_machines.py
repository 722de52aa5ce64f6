"""State machines for domain workflows.

Deterministic state machine that defines valid transitions for the
checkout flow. Transitions are validated before any side effect runs.
"""

from enum import Enum

from storefront.domain.exceptions import InvalidStateTransitionError


# ============================================================================
# Checkout State Machine
# ============================================================================


class CheckoutStatus(str, Enum):
    """Checkout lifecycle states.

    State diagram:
        IDLE ◄──────────────── cancel ───────────────┐
          │                                          │
          │ start (cart not empty)                   │
          ▼                                          │
        REVIEWING ───────────────────────────────────┘
          │      ▲
          │ submit│ validation failed
          ▼      │
        SUBMITTING
          │
          │ order recorded, cart cleared
          ▼
        COMPLETED ──► REVIEWING (next checkout) / IDLE
    """

    IDLE = "idle"
    REVIEWING = "reviewing"
    SUBMITTING = "submitting"
    COMPLETED = "completed"

    def can_transition_to(self, target: "CheckoutStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _CHECKOUT_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["CheckoutStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return sorted(_CHECKOUT_TRANSITIONS.get(self, set()), key=lambda s: s.value)

    def accepts_submission(self) -> bool:
        return self is CheckoutStatus.REVIEWING


# Checkout state transitions (defined outside enum to avoid Enum restrictions)
_CHECKOUT_TRANSITIONS: dict[CheckoutStatus, set[CheckoutStatus]] = {
    CheckoutStatus.IDLE: {CheckoutStatus.REVIEWING},
    CheckoutStatus.REVIEWING: {CheckoutStatus.SUBMITTING, CheckoutStatus.IDLE},
    CheckoutStatus.SUBMITTING: {CheckoutStatus.COMPLETED, CheckoutStatus.REVIEWING},
    CheckoutStatus.COMPLETED: {CheckoutStatus.REVIEWING, CheckoutStatus.IDLE},
}


def validate_checkout_transition(
    checkout_id: str,
    current: CheckoutStatus,
    target: CheckoutStatus,
) -> None:
    """Validate a checkout state transition.

    Args:
        checkout_id: ID of the checkout (session) for error messages.
        current: Current state.
        target: Target state.

    Raises:
        InvalidStateTransitionError: If transition is not allowed.
    """
    if not current.can_transition_to(target):
        raise InvalidStateTransitionError(
            entity_type="Checkout",
            entity_id=checkout_id,
            current_state=current.value,
            target_state=target.value,
            allowed_transitions=[s.value for s in current.allowed_transitions()],
        )
