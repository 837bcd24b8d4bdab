"""Payable ORM model for commissions owed to partners."""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import CheckConstraint, Date, Index, Integer, Numeric, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from partnerdesk.models import Base, BaseModel


class PayableStatus(str, Enum):
    """Payout state of a payable."""

    PENDING = "Pending"
    PAID = "Paid"


class Payable(Base, BaseModel):
    """Commission the platform owes a partner, paid out of the wallet."""

    __tablename__ = "payables"

    recipient_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    recipient_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    entry_date: Mapped[date] = mapped_column("date", Date, nullable=False, default=date.today)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    seller_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    payable_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[PayableStatus] = mapped_column(
        SAEnum(
            PayableStatus,
            name="payable_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=PayableStatus.PENDING,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("payable_amount > 0", name="ck_payables_amount_positive"),
        Index("idx_payable_status", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Payable(id={self.id!r}, recipient_id={self.recipient_id!r}, "
            f"payable_amount={self.payable_amount}, status={self.status})>"
        )


__all__ = ["Payable", "PayableStatus"]
