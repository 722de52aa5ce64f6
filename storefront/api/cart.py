"""Cart API endpoints.

Provides endpoints for the session cart:
- GET /cart - contents and totals
- POST /cart/items - add a product
- PATCH /cart/items/{id} - set a line quantity
- POST /cart/items/{id}/increment, /decrement - step a line quantity
- DELETE /cart/items/{id} - remove a line
- DELETE /cart - empty the cart
- POST /cart/undo - revert the most recent action
- GET /cart/snapshot, PUT /cart/snapshot - save and load contents
"""

from fastapi import APIRouter, status

from storefront.api.dependencies import SessionDep, result_error
from storefront.api.schemas import (
    AddItemRequest,
    CartResponse,
    ClearCartResponse,
    ErrorResponse,
    RestoreResponse,
    SkippedLineSchema,
    SnapshotSchema,
    UndoResponse,
    UpdateQuantityRequest,
)
from storefront.application.session_service import CartActionResult, ShoppingSession

router = APIRouter(prefix="/cart", tags=["Cart"])

MUTATION_RESPONSES = {
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def cart_response(session: ShoppingSession) -> CartResponse:
    return CartResponse.build(session.session_id, session.cart, len(session.history))


def _respond(session: ShoppingSession, result: CartActionResult) -> CartResponse:
    if not result.success:
        details = [{"field": k, "message": str(v)} for k, v in (result.details or {}).items()]
        raise result_error(result.error_code, result.error, details)
    return cart_response(session)


@router.get("", response_model=CartResponse, summary="Get cart")
async def get_cart(session: SessionDep) -> CartResponse:
    """Get cart contents, size and total."""
    return cart_response(session)


@router.post(
    "/items",
    response_model=CartResponse,
    status_code=status.HTTP_201_CREATED,
    responses=MUTATION_RESPONSES,
    summary="Add product to cart",
)
async def add_item(request: AddItemRequest, session: SessionDep) -> CartResponse:
    """Add units of a product.

    Adding a product already in the cart increases its line quantity.

    Raises:
        HTTPException: 404 for unknown products, 422 for bad quantities.
    """
    return _respond(session, session.add_to_cart(request.product_id, request.quantity))


@router.patch(
    "/items/{product_id}",
    response_model=CartResponse,
    responses=MUTATION_RESPONSES,
    summary="Set line quantity",
)
async def update_item(
    product_id: str, request: UpdateQuantityRequest, session: SessionDep
) -> CartResponse:
    """Set the quantity of a cart line.

    Raises:
        HTTPException: 404 if not in cart, 422 for bad quantities.
    """
    return _respond(session, session.change_quantity(product_id, request.quantity))


@router.post(
    "/items/{product_id}/increment",
    response_model=CartResponse,
    responses=MUTATION_RESPONSES,
    summary="Increase line quantity by one",
)
async def increment_item(product_id: str, session: SessionDep) -> CartResponse:
    return _respond(session, session.increment(product_id))


@router.post(
    "/items/{product_id}/decrement",
    response_model=CartResponse,
    responses=MUTATION_RESPONSES,
    summary="Decrease line quantity by one",
)
async def decrement_item(product_id: str, session: SessionDep) -> CartResponse:
    return _respond(session, session.decrement(product_id))


@router.delete(
    "/items/{product_id}",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Remove line",
)
async def remove_item(product_id: str, session: SessionDep) -> CartResponse:
    """Remove a product's line from the cart.

    Raises:
        HTTPException: 404 if not in cart.
    """
    return _respond(session, session.remove_from_cart(product_id))


@router.delete("", response_model=ClearCartResponse, summary="Empty cart")
async def clear_cart(session: SessionDep) -> ClearCartResponse:
    """Empty the cart. This is not recorded for undo."""
    removed = session.clear_cart()
    return ClearCartResponse(lines_removed=removed, cart=cart_response(session))


@router.post("/undo", response_model=UndoResponse, summary="Undo last cart action")
async def undo(session: SessionDep) -> UndoResponse:
    """Revert the most recent recorded cart action.

    With nothing to undo the cart is returned unchanged with
    ``undone`` false.
    """
    result = session.undo_last_action()
    record = result.record
    return UndoResponse(
        undone=result.undone,
        action_type=record.action_type.value if record else None,
        product_id=record.product_id if record else None,
        cart=cart_response(session),
    )


@router.get("/snapshot", response_model=SnapshotSchema, summary="Save cart and wishlist")
async def get_snapshot(session: SessionDep) -> SnapshotSchema:
    return SnapshotSchema(**session.snapshot())


@router.put("/snapshot", response_model=RestoreResponse, summary="Load cart and wishlist")
async def put_snapshot(snapshot: SnapshotSchema, session: SessionDep) -> RestoreResponse:
    """Replace cart (and wishlist, if given) from a snapshot.

    Unknown products and bad entries are skipped and reported. The undo
    history is cleared.
    """
    report = session.load_snapshot(snapshot.cart, snapshot.wishlist)
    return RestoreResponse(
        restored=report.restored,
        skipped=[
            SkippedLineSchema(position=s.position, product_id=s.product_id, reason=s.reason)
            for s in report.skipped
        ],
        cart=cart_response(session),
    )
