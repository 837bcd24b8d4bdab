"""Wallet, payable and payment history schemas."""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from partnerdesk.models.payable import PayableStatus
from partnerdesk.models.payment_history import PaymentDirection

class OpenPayableRequest(BaseModel):
    """Commission owed to a partner."""

    recipient_id: str = Field(..., min_length=1)
    recipient_name: str = ""
    payable_amount: Decimal = Field(..., gt=0, decimal_places=2)
    id: str | None = Field(default=None, min_length=1)
    entry_date: date | None = None
    description: str | None = None
    seller_id: str | None = None

class PayableRecord(BaseModel):
    """Payable as read from the store."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    recipient_id: str
    recipient_name: str
    entry_date: date
    payable_amount: Decimal = Field(..., gt=0)
    status: PayableStatus
    description: str | None = None
    seller_id: str | None = None

class PaymentHistoryRecord(BaseModel):
    """Wallet movement as read from the store."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    entry_date: date
    name: str
    transaction_id: str
    amount: Decimal
    payment_method: str
    type: PaymentDirection

class WalletSummaryView(BaseModel):
    """Wallet totals shown on the billing dashboard."""

    total_balance: Decimal = Decimal("0")
    revenue: Decimal = Decimal("0")
    payable: Decimal = Decimal("0")
    receivable: Decimal = Decimal("0")


class PaymentMethod(str, Enum):
    """How money moved in or out of the wallet."""

    WALLET = "Wallet"
    CASH = "cash"
    CHEQUE = "cheque"
    DEBIT_CARD = "debit card"
    CREDIT_CARD = "credit card"
    GPAY = "gpay"
    PHONEPE = "phonepe"
    PAYTM = "paytm"
    UPI = "upi"
    OTHERS = "others"

class WalletAction(str, Enum):
    """Manual wallet operations available to admins."""

    TOPUP = "Topup wallet"
    RECEIVE_FROM_PARTNER = "Receive from partner"
    RECEIVE_FROM_CUSTOMER = "Receive from customer"
    SEND_TO_PARTNER = "Send to partner"
    SEND_TO_CUSTOMER = "Send to customer"

    @property
    def needs_recipient(self) -> bool:
        return self is not WalletAction.TOPUP

    @property
    def is_credit(self) -> bool:
        return self in (
            WalletAction.TOPUP,
            WalletAction.RECEIVE_FROM_PARTNER,
            WalletAction.RECEIVE_FROM_CUSTOMER,
        )

class WalletTransactionRequest(BaseModel):
    """Top-up, receipt or payout recorded by an admin."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    action: WalletAction
    amount: Decimal = Field(..., ge=1, decimal_places=2)
    payment_method: PaymentMethod = Field(..., alias="paymentMethod")
    recipient_id: str | None = Field(default=None, alias="recipientId")

    @model_validator(mode="after")
    def _recipient_required(self) -> "WalletTransactionRequest":
        if self.action.needs_recipient and not self.recipient_id:
            raise ValueError("Recipient ID is required for this action.")
        return self

class AdHocPaymentRequest(BaseModel):
    """One-off payment to a partner outside the commission payables."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    recipient_name: str = Field(..., min_length=1, alias="recipientName")
    recipient_id: str = Field(..., min_length=1, alias="recipientId")
    amount: Decimal = Field(..., ge=1, decimal_places=2)
    payment_method: PaymentMethod = Field(..., alias="paymentMethod")

class PartnerWalletView(BaseModel):
    """A partner's commission earnings."""

    total_earning: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    pending_amount: Decimal = Decimal("0")
    transactions: list[PayableRecord] = Field(default_factory=list)

__all__ = [
    "AdHocPaymentRequest",
    "OpenPayableRequest",
    "PartnerWalletView",
    "PayableRecord",
    "PaymentHistoryRecord",
    "PaymentMethod",
    "WalletAction",
    "WalletSummaryView",
    "WalletTransactionRequest",
]
