"""Receivable service: pending-payment listing and partner collections.

Provides methods for:
- Listing a partner's pending receivables
- Collecting partial or full payments against a receivable (atomic, retried on conflicts)
- Opening receivables for confirmed orders and listing all receivables
"""

import logging
from decimal import Decimal
from typing import Any, Collection, Mapping

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from partnerdesk.models import Receivable, ReceivableStatus
from partnerdesk.schemas.receivables import (
    CollectPaymentRequest,
    OpenReceivableRequest,
    ReceivableRecord,
)
from partnerdesk.services.errors import (
    ActionResult,
    AppError,
    ErrorCode,
    OverCollectionError,
    PaymentNotPendingError,
    ReceivableNotFoundError,
    unexpected_error,
)
from partnerdesk.services.transactions import STORE_FAULTS, run_in_transaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def apply_collection(receivable: Receivable | None, amount: Decimal) -> Receivable:
    """Check a collection against the current receivable state and apply it.

    Args:
        receivable: Freshly read receivable, or None when the id did not resolve
        amount: Positive amount collected

    Returns:
        The mutated receivable

    Raises:
        ReceivableNotFoundError: receivable is None
        PaymentNotPendingError: receivable already Received
        OverCollectionError: amount exceeds the pending balance
    """
    if receivable is None:
        raise ReceivableNotFoundError()
    if receivable.status != ReceivableStatus.PENDING:
        raise PaymentNotPendingError()
    if amount > receivable.pending_amount:
        raise OverCollectionError()

    new_pending_amount = receivable.pending_amount - amount
    receivable.pending_amount = new_pending_amount
    receivable.status = (
        ReceivableStatus.RECEIVED if new_pending_amount <= 0 else ReceivableStatus.PENDING
    )
    return receivable


async def get_receivable_for_update(session: AsyncSession, receivable_id: str) -> Receivable | None:
    """Read one receivable, locking the row where the backend supports it."""
    stmt = select(Receivable).where(Receivable.id == receivable_id).with_for_update()
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


class ReceivableService:
    """Partner receivables and the collection workflow."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize with a session factory.

        Args:
            session_factory: Produces a fresh AsyncSession per transaction attempt
        """
        self.session_factory = session_factory

    async def list_pending_receivables(self, partner_id: str) -> list[ReceivableRecord]:
        """List pending receivables for a partner.

        Partners can be identified by user ID (legacy) or partner code; the
        identifier is matched as given.

        Args:
            partner_id: Partner identifier

        Returns:
            Matching pending receivables; empty when none match or the store fails
        """
        if not partner_id or not partner_id.strip():
            return []

        try:
            async with self.session_factory() as session:
                stmt = (
                    select(Receivable)
                    .where(
                        Receivable.partner_id == partner_id,
                        Receivable.status == ReceivableStatus.PENDING,
                    )
                    .order_by(Receivable.entry_date, Receivable.id)
                )
                result = await session.execute(stmt)
                return [ReceivableRecord.model_validate(r) for r in result.scalars().all()]
        except (*STORE_FAULTS, ValidationError) as e:
            logger.error(
                f"Error fetching pending receivables for partner {partner_id}: {e}",
                exc_info=True,
            )
            return []

    async def collect_payment(
        self,
        request: CollectPaymentRequest | Mapping[str, Any],
        partner_ids: Collection[str] | None = None,
    ) -> ActionResult:
        """Apply one collected payment to one receivable.

        The receivable is re-read and re-checked inside the transaction on every
        attempt. Never raises: all outcomes come back as an ActionResult.

        Args:
            request: receivable id and positive amount collected
            partner_ids: When given, only receivables of these partner identifiers
                may be collected; others are reported as not found

        Returns:
            ActionResult (success, or failure with code and reason)
        """
        try:
            data = CollectPaymentRequest.model_validate(request)
        except ValidationError as e:
            logger.warning(f"Invalid collection request: {e.error_count()} validation error(s)")
            return ActionResult.fail(ErrorCode.VALIDATION_ERROR, "Invalid data submitted.")

        async def collect(session: AsyncSession) -> tuple[Decimal, ReceivableStatus]:
            receivable = await get_receivable_for_update(session, data.receivable_id)
            if (
                receivable is not None
                and partner_ids is not None
                and receivable.partner_id not in partner_ids
            ):
                logger.warning(
                    f"Collection on {data.receivable_id} outside partner scope {list(partner_ids)}"
                )
                receivable = None
            apply_collection(receivable, data.amount_collected)
            return receivable.pending_amount, receivable.status

        try:
            pending_amount, status = await run_in_transaction(self.session_factory, collect)
        except AppError as e:
            if e.code == ErrorCode.STORE_ERROR:
                logger.error(f"Error collecting payment for {data.receivable_id}: {e.message}")
                return unexpected_error(e)
            logger.warning(
                f"Collection of {data.amount_collected} rejected for "
                f"{data.receivable_id}: {e.message}"
            )
            return ActionResult.from_error(e)
        except STORE_FAULTS as e:
            logger.error(f"Error collecting payment for {data.receivable_id}: {e}", exc_info=True)
            return unexpected_error(e)

        logger.info(
            f"Collected {data.amount_collected} for receivable {data.receivable_id}: "
            f"pending={pending_amount} status={status.value}"
        )
        return ActionResult.ok("Payment collected successfully.")

    async def list_receivables(self) -> list[ReceivableRecord]:
        """List all receivables, newest first."""
        async with self.session_factory() as session:
            stmt = select(Receivable).order_by(Receivable.entry_date.desc(), Receivable.id)
            result = await session.execute(stmt)
            return [ReceivableRecord.model_validate(r) for r in result.scalars().all()]

    async def open_receivable(self, data: OpenReceivableRequest) -> ReceivableRecord:
        """Create a receivable for a confirmed order.

        Pending balance is the order total minus what the customer already paid;
        a fully paid order is opened as Received with a zero balance.

        Args:
            data: Order and partner details

        Returns:
            Created receivable record

        Raises:
            SQLAlchemyError: Insert failed (e.g. duplicate id)
        """
        pending_amount = data.total_amount - data.amount_paid
        if pending_amount <= 0:
            pending_amount = ZERO
            status = ReceivableStatus.RECEIVED
        else:
            status = ReceivableStatus.PENDING

        fields = data.model_dump(exclude={"amount_paid"}, exclude_none=True)
        receivable = Receivable(**fields, pending_amount=pending_amount, status=status)

        async with self.session_factory() as session:
            async with session.begin():
                session.add(receivable)
                await session.flush()
                await session.refresh(receivable)
                record = ReceivableRecord.model_validate(receivable)

        logger.info(
            f"Opened receivable {record.id} for partner {record.partner_id}: "
            f"pending={record.pending_amount} status={record.status.value}"
        )
        return record


__all__ = ["ReceivableService", "apply_collection", "get_receivable_for_update"]
