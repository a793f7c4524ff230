"""Marketplace order and earnings procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_earnings, serialize_order
from server.apps.payments import schemas
from server.apps.payments.logic import order_operations

router = Router('payment')


@router.mutation('createOrder', schemas.OrderCreate)
def create_order(context: CallContext, data: schemas.OrderCreate) -> dict[str, Any]:
    order = order_operations.create_order(
        context.repos.payments,
        context.repos.circles,
        context.require_user(),
        data.file_id,
        data.payment_method,
    )
    return {'orderId': order.id, 'amount': order.amount}


@router.query('getOrder', schemas.OrderRef)
def get_order(context: CallContext, data: schemas.OrderRef) -> dict[str, Any]:
    order = order_operations.get_order(
        context.repos.payments,
        context.require_user(),
        data.order_id,
    )
    return serialize_order(order)


@router.mutation('completeOrder', schemas.OrderComplete)
def complete_order(
    context: CallContext,
    data: schemas.OrderComplete,
) -> dict[str, bool]:
    order_operations.complete_order(
        context.repos.payments,
        context.require_user(),
        data.order_id,
        data.transaction_id,
    )
    return {'success': True}


@router.query('getUserEarnings')
def get_user_earnings(context: CallContext, _: None) -> dict[str, Any]:
    earnings = order_operations.get_user_earnings(
        context.repos.payments,
        context.require_user(),
    )
    return serialize_earnings(earnings)


@router.query('getSellerOrders', schemas.OrderPage)
def get_seller_orders(
    context: CallContext,
    data: schemas.OrderPage,
) -> list[dict[str, Any]]:
    orders = order_operations.list_seller_orders(
        context.repos.payments,
        context.require_user(),
        data.limit,
        data.offset,
    )
    return [serialize_order(order) for order in orders]


@router.query('getBuyerOrders', schemas.OrderPage)
def get_buyer_orders(
    context: CallContext,
    data: schemas.OrderPage,
) -> list[dict[str, Any]]:
    orders = order_operations.list_buyer_orders(
        context.repos.payments,
        context.require_user(),
        data.limit,
        data.offset,
    )
    return [serialize_order(order) for order in orders]
