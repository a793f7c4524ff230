"""Data access for orders and earnings."""

from datetime import datetime
from decimal import Decimal

from django.db.models import F

from server.apps.payments.models import PaymentOrder, PlatformEarnings, UserEarnings
from server.common.repository import Repository


class PaymentRepository(Repository):
    """Queries and mutations on the marketplace ledger."""

    def create_order(  # noqa: WPS211
        self,
        file_id: int,
        buyer_id: int,
        seller_id: int,
        amount: Decimal,
        platform_fee: Decimal,
        seller_amount: Decimal,
        payment_method: str,
    ) -> PaymentOrder:
        """Insert a pending order."""
        return self.query(PaymentOrder).create(
            file_id=file_id,
            buyer_id=buyer_id,
            seller_id=seller_id,
            amount=amount,
            platform_fee=platform_fee,
            seller_amount=seller_amount,
            payment_method=payment_method,
        )

    def get_order(self, order_id: int) -> PaymentOrder | None:
        """Get order by ID."""
        return self.query(PaymentOrder).filter(id=order_id).first()

    def get_order_for_update(self, order_id: int) -> PaymentOrder | None:
        """Get order by ID and lock its row until the transaction ends.

        Must be called inside ``atomic()``.
        """
        return self.query(PaymentOrder).select_for_update().filter(
            id=order_id,
        ).first()

    def has_completed_order(self, file_id: int, buyer_id: int) -> bool:
        """Check whether a buyer already paid for a file."""
        return self.query(PaymentOrder).filter(
            file_id=file_id,
            buyer_id=buyer_id,
            status=PaymentOrder.Status.COMPLETED,
        ).exists()

    def mark_completed(
        self,
        order: PaymentOrder,
        transaction_id: str,
        completed_at: datetime,
    ) -> PaymentOrder:
        """Move an order to completed."""
        order.status = PaymentOrder.Status.COMPLETED
        order.transaction_id = transaction_id
        order.completed_at = completed_at
        order.save(
            using=self.alias,
            update_fields=['status', 'transaction_id', 'completed_at'],
        )
        return order

    def list_buyer_orders(
        self,
        buyer_id: int,
        limit: int,
        offset: int,
    ) -> list[PaymentOrder]:
        """Orders placed by a user, newest first."""
        return list(
            self.query(PaymentOrder)
            .filter(buyer_id=buyer_id)
            .order_by('-created_at', '-id')[offset:offset + limit],
        )

    def list_seller_orders(
        self,
        seller_id: int,
        limit: int,
        offset: int,
    ) -> list[PaymentOrder]:
        """Orders for a user's files, newest first."""
        return list(
            self.query(PaymentOrder)
            .filter(seller_id=seller_id)
            .order_by('-created_at', '-id')[offset:offset + limit],
        )

    def get_user_earnings(self, user_id: int) -> UserEarnings | None:
        """Get a seller's running totals."""
        return self.query(UserEarnings).filter(user_id=user_id).first()

    def add_user_earnings(self, user_id: int, amount: Decimal) -> None:
        """Credit ``amount`` to a seller's total and available balance."""
        self.query(UserEarnings).get_or_create(user_id=user_id)
        self.query(UserEarnings).filter(user_id=user_id).update(
            total_earnings=F('total_earnings') + amount,
            available_amount=F('available_amount') + amount,
        )

    def get_platform_earnings(self, month: str) -> PlatformEarnings | None:
        """Get platform totals of a month (YYYY-MM)."""
        return self.query(PlatformEarnings).filter(month=month).first()

    def add_platform_earnings(self, month: str, fee: Decimal) -> None:
        """Credit one transaction's fee to a month's platform totals."""
        self.query(PlatformEarnings).get_or_create(month=month)
        self.query(PlatformEarnings).filter(month=month).update(
            total_earnings=F('total_earnings') + fee,
            transaction_count=F('transaction_count') + 1,
        )
