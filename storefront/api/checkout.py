"""Checkout API endpoints.

Provides endpoints for the session checkout flow:
- GET /checkout - current checkout state
- POST /checkout/start - review the cart (idle -> reviewing)
- POST /checkout/submit - validate the form and place the order
- POST /checkout/cancel - leave review without ordering
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body

from storefront.api.dependencies import SessionDep, result_error
from storefront.api.schemas import (
    CheckoutStateResponse,
    ErrorDetail,
    ErrorResponse,
    OrderSchema,
    PriceSchema,
)
from storefront.application.checkout_service import CheckoutResult
from storefront.application.session_service import ShoppingSession

router = APIRouter(prefix="/checkout", tags=["Checkout"])


def checkout_response(
    session: ShoppingSession, result: CheckoutResult | None = None
) -> CheckoutStateResponse:
    checkout = session.checkout
    return CheckoutStateResponse(
        status=checkout.status.value,
        allowed_transitions=[s.value for s in checkout.status.allowed_transitions()],
        field_errors=[ErrorDetail(field=e.field, message=e.reason) for e in checkout.last_errors],
        cart_total=PriceSchema.from_money(session.cart.total),
        order=OrderSchema.from_order(result.order) if result and result.order else None,
    )


def _respond(session: ShoppingSession, result: CheckoutResult) -> CheckoutStateResponse:
    if not result.success:
        details = [{"field": e.field, "message": e.reason} for e in result.field_errors]
        raise result_error(result.error_code, result.error, details)
    return checkout_response(session, result)


@router.get("", response_model=CheckoutStateResponse, summary="Get checkout state")
async def get_checkout(session: SessionDep) -> CheckoutStateResponse:
    return checkout_response(session)


@router.post(
    "/start",
    response_model=CheckoutStateResponse,
    responses={409: {"model": ErrorResponse}},
    summary="Start checkout",
)
async def start_checkout(session: SessionDep) -> CheckoutStateResponse:
    """Move the checkout to review.

    Raises:
        HTTPException: 409 if the cart is empty.
    """
    return _respond(session, session.checkout.start_checkout())


@router.post(
    "/submit",
    response_model=CheckoutStateResponse,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Submit checkout form",
)
async def submit_checkout(
    session: SessionDep,
    form: Annotated[dict[str, Any], Body(description="Checkout form fields")],
) -> CheckoutStateResponse:
    """Validate the checkout form and place the order.

    On success the order is recorded and the cart and undo history are
    cleared. On validation failure every failing field is listed in the
    error details and the checkout returns to review.

    Raises:
        HTTPException: 409 if not under review or the cart is empty,
            422 if the form is invalid.
    """
    return _respond(session, session.checkout.submit(form))


@router.post(
    "/cancel",
    response_model=CheckoutStateResponse,
    responses={409: {"model": ErrorResponse}},
    summary="Cancel checkout",
)
async def cancel_checkout(session: SessionDep) -> CheckoutStateResponse:
    return _respond(session, session.checkout.cancel())
