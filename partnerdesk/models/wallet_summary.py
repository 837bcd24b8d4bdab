"""Wallet summary ORM model: the platform's running cash totals."""

from decimal import Decimal

from sqlalchemy import Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from partnerdesk.models import Base, BaseModel

WALLET_SUMMARY_ID = "summary"


class WalletSummary(Base, BaseModel):
    """Single-row table holding the wallet balance and recognised revenue."""

    __tablename__ = "wallet_summary"

    total_balance: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    revenue: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<WalletSummary(total_balance={self.total_balance}, revenue={self.revenue})>"


__all__ = ["WalletSummary", "WALLET_SUMMARY_ID"]
