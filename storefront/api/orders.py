"""Order API endpoints.

Provides read access to the orders placed in a session.
"""

from fastapi import APIRouter, HTTPException, status

from storefront.api.dependencies import SessionDep
from storefront.api.schemas import ErrorResponse, OrderListResponse, OrderSchema

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("", response_model=OrderListResponse, summary="List orders")
async def list_orders(session: SessionDep) -> OrderListResponse:
    """List orders placed in this session, oldest first."""
    orders = session.ledger.get_orders()
    return OrderListResponse(
        items=[OrderSchema.from_order(order) for order in orders],
        total=len(orders),
    )


@router.get(
    "/{order_id}",
    response_model=OrderSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get order",
)
async def get_order(order_id: str, session: SessionDep) -> OrderSchema:
    """Get an order by ID.

    Raises:
        HTTPException: If order not found.
    """
    order = session.ledger.get_order(order_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": "ORDER_NOT_FOUND",
                "message": f"Order not found: {order_id}",
            },
        )
    return OrderSchema.from_order(order)
