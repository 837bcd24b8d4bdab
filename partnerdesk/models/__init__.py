"""SQLAlchemy base model with common fields and model exports."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Base class for all models
Base = declarative_base()


def new_document_id() -> str:
    """Generate an opaque document id."""
    return uuid.uuid4().hex


class BaseModel:
    """Base model with an opaque string id and timestamp fields."""

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


# Import models to register them with Base (after Base is defined)
# This must be after Base declaration to avoid circular imports
from partnerdesk.models.payable import Payable, PayableStatus  # noqa: E402
from partnerdesk.models.payment_history import PaymentDirection, PaymentHistory  # noqa: E402
from partnerdesk.models.receivable import Receivable, ReceivableStatus  # noqa: E402
from partnerdesk.models.wallet_summary import WALLET_SUMMARY_ID, WalletSummary  # noqa: E402

__all__ = [
    "Base",
    "BaseModel",
    "new_document_id",
    "Receivable",
    "ReceivableStatus",
    "Payable",
    "PayableStatus",
    "PaymentHistory",
    "PaymentDirection",
    "WalletSummary",
    "WALLET_SUMMARY_ID",
]
