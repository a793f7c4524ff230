"""Request structs for the payment procedures."""

from pydantic import Field

from server.apps.payments.models import PaymentOrder
from server.common.schemas import RequestSchema


class OrderCreate(RequestSchema):
    file_id: int
    payment_method: PaymentOrder.PaymentMethod


class OrderRef(RequestSchema):
    order_id: int


class OrderComplete(RequestSchema):
    order_id: int
    transaction_id: str = Field(min_length=1, max_length=255)


class OrderPage(RequestSchema):
    limit: int = Field(20, ge=1, le=200)
    offset: int = Field(0, ge=0)
