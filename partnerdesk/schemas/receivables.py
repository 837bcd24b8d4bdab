"""Receivable request and record schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from partnerdesk.models.receivable import ReceivableStatus


class CollectPaymentRequest(BaseModel):
    """A partial or full payment collected against one receivable."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    receivable_id: str = Field(..., min_length=1, alias="receivableId")
    amount_collected: Decimal = Field(..., gt=0, decimal_places=2, alias="amountCollected")


class OpenReceivableRequest(BaseModel):
    """Order data a receivable is opened from."""

    partner_id: str = Field(..., min_length=1)
    partner_name: str = ""
    total_amount: Decimal = Field(..., ge=0, decimal_places=2)
    amount_paid: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    id: str | None = Field(default=None, min_length=1)
    entry_date: date | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    description: str | None = None
    seller_id: str | None = None


class ReceivableRecord(BaseModel):
    """Receivable as read from the store."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    partner_id: str
    partner_name: str
    entry_date: date
    pending_amount: Decimal = Field(..., ge=0)
    status: ReceivableStatus
    total_amount: Decimal | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    description: str | None = None
    seller_id: str | None = None

    @model_validator(mode="after")
    def _status_matches_balance(self) -> "ReceivableRecord":
        settled = self.pending_amount <= 0
        if settled != (self.status == ReceivableStatus.RECEIVED):
            raise ValueError(
                f"receivable {self.id}: status {self.status.value} "
                f"inconsistent with pending amount {self.pending_amount}"
            )
        return self


__all__ = ["CollectPaymentRequest", "OpenReceivableRequest", "ReceivableRecord"]
