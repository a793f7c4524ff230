"""Django admin configuration for payments app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.payments.models import PaymentOrder, PlatformEarnings, UserEarnings


@admin.register(PaymentOrder)
class PaymentOrderAdmin(admin.ModelAdmin):
    """Admin interface for PaymentOrder model."""

    list_display = [
        'id',
        'file',
        'buyer',
        'seller',
        'amount',
        'platform_fee',
        'payment_method',
        'status',
        'created_at',
    ]

    list_filter = [
        'status',
        'payment_method',
        'created_at',
    ]

    search_fields = [
        'transaction_id',
    ]

    # The ledger is written by order completion only
    readonly_fields = [
        'file',
        'buyer',
        'seller',
        'amount',
        'platform_fee',
        'seller_amount',
        'payment_method',
        'status',
        'transaction_id',
        'created_at',
        'completed_at',
    ]

    def get_queryset(self, request: HttpRequest) -> QuerySet[PaymentOrder]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related(
            'file',
            'buyer',
            'seller',
        )


@admin.register(UserEarnings)
class UserEarningsAdmin(admin.ModelAdmin):
    """Admin interface for UserEarnings model."""

    list_display = [
        'user',
        'total_earnings',
        'withdrawn_amount',
        'available_amount',
        'updated_at',
    ]
    readonly_fields = ['user', 'total_earnings', 'updated_at']


@admin.register(PlatformEarnings)
class PlatformEarningsAdmin(admin.ModelAdmin):
    """Admin interface for PlatformEarnings model."""

    list_display = ['month', 'total_earnings', 'transaction_count']
    readonly_fields = ['month', 'total_earnings', 'transaction_count', 'updated_at']
