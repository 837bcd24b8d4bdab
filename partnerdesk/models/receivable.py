"""Receivable ORM model for balances partners still have to collect."""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import CheckConstraint, Date, Index, Integer, Numeric, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from partnerdesk.models import Base, BaseModel


class ReceivableStatus(str, Enum):
    """Collection state of a receivable."""

    PENDING = "Pending"
    """Balance still outstanding"""

    RECEIVED = "Received"
    """Balance fully collected (terminal)"""


class Receivable(Base, BaseModel):
    """
    Money owed on a confirmed order and collected through a partner.

    pending_amount only ever decreases; status flips to Received exactly when
    the balance reaches zero. Rows are versioned so that concurrent writers
    detect each other at flush time.
    """

    __tablename__ = "receivables"

    partner_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Legacy user id or partner code of the collecting partner",
    )
    partner_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    entry_date: Mapped[date] = mapped_column("date", Date, nullable=False, default=date.today)

    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    seller_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    total_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Order value the receivable was opened for",
    )
    pending_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        comment="Remaining balance to collect",
    )
    status: Mapped[ReceivableStatus] = mapped_column(
        SAEnum(
            ReceivableStatus,
            name="receivable_status",
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ReceivableStatus.PENDING,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("pending_amount >= 0", name="ck_receivables_pending_non_negative"),
        Index("idx_receivable_partner_status", "partner_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Receivable(id={self.id!r}, partner_id={self.partner_id!r}, "
            f"pending_amount={self.pending_amount}, status={self.status})>"
        )


__all__ = ["Receivable", "ReceivableStatus"]
