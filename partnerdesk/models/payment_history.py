"""Payment history ORM model: append-only ledger of wallet movements."""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Date, Numeric, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from partnerdesk.models import Base, BaseModel


class PaymentDirection(str, Enum):
    """Direction of a wallet movement."""

    CREDIT = "Credit"
    DEBIT = "Debit"


class PaymentHistory(Base, BaseModel):
    """One credit or debit against the platform wallet."""

    __tablename__ = "payment_history"

    entry_date: Mapped[date] = mapped_column("date", Date, nullable=False, default=date.today, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    transaction_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[PaymentDirection] = mapped_column(
        SAEnum(
            PaymentDirection,
            name="payment_direction",
            native_enum=False,
            length=10,
            values_callable=lambda directions: [d.value for d in directions],
        ),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<PaymentHistory(id={self.id!r}, transaction_id={self.transaction_id!r}, "
            f"amount={self.amount}, type={self.type})>"
        )


__all__ = ["PaymentHistory", "PaymentDirection"]
