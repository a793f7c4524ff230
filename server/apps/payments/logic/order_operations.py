"""Business logic for orders and earnings.

Amounts are ``Decimal`` throughout. The platform keeps
``CIRCLES_PLATFORM_FEE_RATE`` of every sale, stored to five decimal
places; the seller gets the rest.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from django.conf import settings
from django.utils import timezone

from server.apps.accounts.models import User
from server.apps.circles.repository import CircleRepository
from server.apps.payments.models import PaymentOrder, UserEarnings
from server.apps.payments.repository import PaymentRepository
from server.common.exceptions import BadRequestError, ForbiddenError, NotFoundError

_LEDGER_PLACES: Final = Decimal('0.00001')

logger = logging.getLogger(__name__)


def calculate_fees(amount: Decimal) -> tuple[Decimal, Decimal]:
    """Split a sale amount between platform and seller.

    Example: Decimal('4.99') -> (Decimal('0.00499'), Decimal('4.98501'))

    Args:
        amount: Sale price.

    Returns:
        Tuple of (platform_fee, seller_amount).
    """
    rate = Decimal(settings.CIRCLES_PLATFORM_FEE_RATE)
    platform_fee = (amount * rate).quantize(
        _LEDGER_PLACES,
        rounding=ROUND_HALF_UP,
    )
    return platform_fee, amount - platform_fee


def create_order(
    payments: PaymentRepository,
    circles: CircleRepository,
    user: User,
    file_id: int,
    payment_method: str,
) -> PaymentOrder:
    """Open a pending order for a paid file.

    Args:
        payments: Payment repository.
        circles: Circle repository, for the file lookup.
        user: Buyer.
        file_id: File to buy.
        payment_method: One of ``PaymentOrder.PaymentMethod`` values.

    Returns:
        Pending order with fees fixed.

    Raises:
        NotFoundError: If the file does not exist.
        BadRequestError: If the file is not for sale, belongs to the
            buyer, or was already bought by the buyer.
    """
    file_instance = circles.get_file(file_id)
    if file_instance is None:
        raise NotFoundError('File not found')
    if not file_instance.is_paid or not file_instance.price:
        raise BadRequestError('This file is not for sale')
    if file_instance.uploader_id == user.id:
        raise BadRequestError('You cannot buy your own file')
    if payments.has_completed_order(file_id, user.id):
        raise BadRequestError('You already own this file')

    amount = file_instance.price
    platform_fee, seller_amount = calculate_fees(amount)
    order = payments.create_order(
        file_id=file_id,
        buyer_id=user.id,
        seller_id=file_instance.uploader_id,
        amount=amount,
        platform_fee=platform_fee,
        seller_amount=seller_amount,
        payment_method=payment_method,
    )
    logger.info(
        'Order created: ID=%d file=%d buyer=%d amount=%s',
        order.id,
        file_id,
        user.id,
        amount,
    )
    return order


def get_order(payments: PaymentRepository, user: User, order_id: int) -> PaymentOrder:
    """Get an order for its buyer or seller.

    Raises:
        NotFoundError: If the order does not exist.
        ForbiddenError: If the caller is neither buyer nor seller.
    """
    order = payments.get_order(order_id)
    if order is None:
        raise NotFoundError('Order not found')
    if user.id not in {order.buyer_id, order.seller_id}:
        raise ForbiddenError('Not authorized to view this order')
    return order


def complete_order(
    payments: PaymentRepository,
    user: User,
    order_id: int,
    transaction_id: str,
) -> PaymentOrder:
    """Record payment of a pending order and book the earnings.

    The order row is locked, then the order, the seller's earnings and
    the month's platform earnings are updated in one transaction.

    Args:
        payments: Payment repository.
        user: Caller, must be the buyer.
        order_id: Order ID.
        transaction_id: Reference from the payment channel.

    Returns:
        Completed order.

    Raises:
        NotFoundError: If the order does not exist.
        ForbiddenError: If the caller is not the buyer.
        BadRequestError: If the order is not pending, or the buyer
            already completed another order for the same file.
    """
    with payments.atomic():
        order = payments.get_order_for_update(order_id)
        if order is None:
            raise NotFoundError('Order not found')
        if order.buyer_id != user.id:
            raise ForbiddenError('Only the buyer can complete this order')
        if not order.is_pending:
            raise BadRequestError('Order is not pending')
        # Another order for the same file may have completed meanwhile
        if order.file_id is not None and payments.has_completed_order(
            order.file_id,
            order.buyer_id,
        ):
            raise BadRequestError('You already own this file')

        now = timezone.now()
        order = payments.mark_completed(order, transaction_id, now)
        payments.add_user_earnings(order.seller_id, order.seller_amount)
        payments.add_platform_earnings(now.strftime('%Y-%m'), order.platform_fee)

    logger.info(
        'Order completed: ID=%d seller=%d amount=%s fee=%s',
        order.id,
        order.seller_id,
        order.seller_amount,
        order.platform_fee,
    )
    return order


def get_user_earnings(payments: PaymentRepository, user: User) -> UserEarnings:
    """Caller's earnings; an unsaved zero row when nothing was sold yet."""
    earnings = payments.get_user_earnings(user.id)
    if earnings is None:
        return UserEarnings(user=user)
    return earnings


def list_buyer_orders(
    payments: PaymentRepository,
    user: User,
    limit: int = 20,
    offset: int = 0,
) -> list[PaymentOrder]:
    """Orders the caller placed."""
    return payments.list_buyer_orders(user.id, limit, offset)


def list_seller_orders(
    payments: PaymentRepository,
    user: User,
    limit: int = 20,
    offset: int = 0,
) -> list[PaymentOrder]:
    """Orders for the caller's files."""
    return payments.list_seller_orders(user.id, limit, offset)
