"""Database models for payments app."""

from decimal import Decimal
from typing import ClassVar, Final, final

from typing_extensions import override

from django.conf import settings
from django.db import models

_AMOUNT_MAX_DIGITS: Final = 12
_AMOUNT_DECIMAL_PLACES: Final = 2
# 0.1% of a cent amount is exact at five places
_LEDGER_MAX_DIGITS: Final = 15
_LEDGER_DECIMAL_PLACES: Final = 5
_CHOICE_MAX_LENGTH: Final = 32
_TRANSACTION_ID_MAX_LENGTH: Final = 255
_MONTH_MAX_LENGTH: Final = 7  # YYYY-MM


def _amount_field(**kwargs: object) -> models.DecimalField:
    return models.DecimalField(
        max_digits=_AMOUNT_MAX_DIGITS,
        decimal_places=_AMOUNT_DECIMAL_PLACES,
        **kwargs,
    )


def _ledger_field(**kwargs: object) -> models.DecimalField:
    return models.DecimalField(
        max_digits=_LEDGER_MAX_DIGITS,
        decimal_places=_LEDGER_DECIMAL_PLACES,
        **kwargs,
    )


@final
class PaymentOrder(models.Model):
    """Purchase of a paid file.

    Fees are fixed when the order is created. Orders move from pending
    to completed only; the row outlives the purchased file.
    """

    class PaymentMethod(models.TextChoices):
        """Supported payment channels."""

        WECHAT = 'wechat', 'WeChat Pay'
        ALIPAY = 'alipay', 'Alipay'

    class Status(models.TextChoices):
        """Order lifecycle states."""

        PENDING = 'pending', 'Pending'
        COMPLETED = 'completed', 'Completed'

    file = models.ForeignKey(
        'circles.File',
        on_delete=models.SET_NULL,
        related_name='orders',
        blank=True,
        null=True,
    )

    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='purchases',
    )

    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sales',
    )

    amount = _amount_field()
    platform_fee = _ledger_field()
    seller_amount = _ledger_field()

    payment_method = models.CharField(
        max_length=_CHOICE_MAX_LENGTH,
        choices=PaymentMethod.choices,
    )

    status = models.CharField(
        max_length=_CHOICE_MAX_LENGTH,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    transaction_id = models.CharField(
        max_length=_TRANSACTION_ID_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Reference issued by the payment channel',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Payment Order'  # type: ignore[mutable-override]
        verbose_name_plural = 'Payment Orders'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

        indexes: ClassVar[list[models.Index]] = [
            models.Index(
                fields=['buyer', '-created_at'],
                name='orders_buyer_recent_idx',
            ),
            models.Index(
                fields=['seller', '-created_at'],
                name='orders_seller_recent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'Order {self.pk} ({self.status})'

    @property
    def is_pending(self) -> bool:
        """Whether the order can still be completed."""
        return self.status == self.Status.PENDING


@final
class UserEarnings(models.Model):
    """Running totals of a seller's income."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='earnings',
    )

    total_earnings = _ledger_field(default=Decimal('0.00'))
    withdrawn_amount = _ledger_field(default=Decimal('0.00'))
    available_amount = _ledger_field(default=Decimal('0.00'))

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'User Earnings'  # type: ignore[mutable-override]
        verbose_name_plural = 'User Earnings'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user}: {self.total_earnings}'


@final
class PlatformEarnings(models.Model):
    """Platform fee income per calendar month."""

    month = models.CharField(
        max_length=_MONTH_MAX_LENGTH,
        unique=True,
        help_text='YYYY-MM',
    )

    total_earnings = _ledger_field(default=Decimal('0.00'))

    transaction_count = models.PositiveIntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Platform Earnings'  # type: ignore[mutable-override]
        verbose_name_plural = 'Platform Earnings'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-month']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.month}: {self.total_earnings}'
