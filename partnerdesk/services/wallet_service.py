"""Wallet service: platform balance, payables and payment history.

Settling a receivable credits the wallet, paying a payable debits it; both
append to the payment history in the same transaction. Admins can also move
money in and out of the wallet by hand and record ad-hoc payouts.
"""

import logging
import secrets
from datetime import date
from decimal import Decimal
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from partnerdesk.models import (
    WALLET_SUMMARY_ID,
    Payable,
    PayableStatus,
    PaymentDirection,
    PaymentHistory,
    Receivable,
    ReceivableStatus,
    WalletSummary,
)
from partnerdesk.schemas.wallet import (
    AdHocPaymentRequest,
    OpenPayableRequest,
    PartnerWalletView,
    PayableRecord,
    PaymentHistoryRecord,
    PaymentMethod,
    WalletAction,
    WalletSummaryView,
    WalletTransactionRequest,
)
from partnerdesk.services.config import settings
from partnerdesk.services.errors import (
    ActionResult,
    AppError,
    ErrorCode,
    InsufficientBalanceError,
    PayableNotFoundError,
    ReceivableNotFoundError,
    unexpected_error,
)
from partnerdesk.services.receivable_service import get_receivable_for_update
from partnerdesk.services.transactions import RETRYABLE_ERRORS, STORE_FAULTS, run_in_transaction

logger = logging.getLogger(__name__)

T = TypeVar("T")

# First-time callers may race to insert the summary row; the loser retries and reads it
WALLET_RETRYABLE_ERRORS = (*RETRYABLE_ERRORS, IntegrityError)

RECIPIENT_LABELS = {
    WalletAction.RECEIVE_FROM_PARTNER: "Received from partner",
    WalletAction.RECEIVE_FROM_CUSTOMER: "Received from customer",
    WalletAction.SEND_TO_PARTNER: "Paid to partner",
    WalletAction.SEND_TO_CUSTOMER: "Paid to customer",
}


def new_transaction_id() -> str:
    """Generate a payment reference like PAY123456789012."""
    return f"PAY{secrets.randbelow(10**12):012d}"


def _as_decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def _history_entry(
    name: str, amount: Decimal, payment_method: str, direction: PaymentDirection
) -> PaymentHistory:
    return PaymentHistory(
        entry_date=date.today(),
        name=name,
        transaction_id=new_transaction_id(),
        amount=amount,
        payment_method=payment_method,
        type=direction,
    )


async def get_or_create_summary(session: AsyncSession) -> WalletSummary:
    """Load the wallet summary row, creating it with opening values if missing."""
    stmt = select(WalletSummary).where(WalletSummary.id == WALLET_SUMMARY_ID).with_for_update()
    summary = (await session.execute(stmt)).scalar_one_or_none()
    if summary is None:
        logger.info("Initializing wallet summary...")
        summary = WalletSummary(
            id=WALLET_SUMMARY_ID,
            total_balance=settings.wallet_opening_balance,
            revenue=settings.wallet_opening_revenue,
        )
        session.add(summary)
        await session.flush()
    return summary


class WalletService:
    """Platform wallet operations."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _run_action(
        self, work: Callable[[AsyncSession], Awaitable[T]], label: str
    ) -> tuple[T | None, ActionResult | None]:
        """Run a wallet transaction, converting failures to an ActionResult.

        Returns:
            (result, None) on commit, (None, failure) otherwise
        """
        try:
            result = await run_in_transaction(
                self.session_factory, work, retry_on=WALLET_RETRYABLE_ERRORS
            )
        except AppError as e:
            if e.code == ErrorCode.STORE_ERROR:
                logger.error(f"{label} failed: {e.message}")
                return None, unexpected_error(e)
            logger.warning(f"{label} rejected: {e.message}")
            return None, ActionResult.from_error(e)
        except STORE_FAULTS as e:
            logger.error(f"{label} failed: {e}", exc_info=True)
            return None, unexpected_error(e)
        return result, None

    async def get_wallet_summary(self) -> WalletSummaryView:
        """Wallet totals plus outstanding payables and receivables.

        Returns:
            WalletSummaryView; all zeros when the store fails
        """

        async def load(session: AsyncSession) -> WalletSummaryView:
            summary = await get_or_create_summary(session)
            payable_total = await session.scalar(
                select(func.sum(Payable.payable_amount)).where(
                    Payable.status == PayableStatus.PENDING
                )
            )
            receivable_total = await session.scalar(
                select(func.sum(Receivable.pending_amount)).where(
                    Receivable.status == ReceivableStatus.PENDING
                )
            )
            return WalletSummaryView(
                total_balance=_as_decimal(summary.total_balance),
                revenue=_as_decimal(summary.revenue),
                payable=_as_decimal(payable_total),
                receivable=_as_decimal(receivable_total),
            )

        try:
            return await run_in_transaction(
                self.session_factory, load, retry_on=WALLET_RETRYABLE_ERRORS
            )
        except (*STORE_FAULTS, AppError) as e:
            logger.error(f"Error fetching wallet summary data: {e}", exc_info=True)
            return WalletSummaryView()

    async def list_payables(self) -> list[PayableRecord]:
        async with self.session_factory() as session:
            stmt = select(Payable).order_by(Payable.entry_date.desc(), Payable.id)
            result = await session.execute(stmt)
            return [PayableRecord.model_validate(p) for p in result.scalars().all()]

    async def list_payment_history(self) -> list[PaymentHistoryRecord]:
        async with self.session_factory() as session:
            stmt = select(PaymentHistory).order_by(
                PaymentHistory.entry_date.desc(), PaymentHistory.created_at.desc()
            )
            result = await session.execute(stmt)
            return [PaymentHistoryRecord.model_validate(h) for h in result.scalars().all()]

    async def get_partner_wallet(self, partner_id: str) -> PartnerWalletView:
        """Commission earnings of one partner.

        Args:
            partner_id: Partner code or legacy user id the payables are keyed by

        Returns:
            Totals over all payables of the partner plus the payables themselves;
            empty when none match or the store fails
        """
        if not partner_id or not partner_id.strip():
            return PartnerWalletView()

        try:
            async with self.session_factory() as session:
                stmt = (
                    select(Payable)
                    .where(Payable.recipient_id == partner_id)
                    .order_by(Payable.entry_date.desc(), Payable.id)
                )
                result = await session.execute(stmt)
                payables = [PayableRecord.model_validate(p) for p in result.scalars().all()]
        except (*STORE_FAULTS, ValidationError) as e:
            logger.error(f"Error fetching partner wallet data for {partner_id}: {e}", exc_info=True)
            return PartnerWalletView()

        paid = sum(
            (p.payable_amount for p in payables if p.status == PayableStatus.PAID), Decimal("0")
        )
        pending = sum(
            (p.payable_amount for p in payables if p.status != PayableStatus.PAID), Decimal("0")
        )
        return PartnerWalletView(
            total_earning=paid + pending,
            paid_amount=paid,
            pending_amount=pending,
            transactions=payables,
        )

    async def open_payable(self, data: OpenPayableRequest) -> PayableRecord:
        """Record a commission owed to a partner.

        Raises:
            SQLAlchemyError: Insert failed (e.g. duplicate id)
        """
        payable = Payable(**data.model_dump(exclude_none=True), status=PayableStatus.PENDING)
        async with self.session_factory() as session:
            async with session.begin():
                session.add(payable)
                await session.flush()
                await session.refresh(payable)
                record = PayableRecord.model_validate(payable)

        logger.info(
            f"Opened payable {record.id} for {record.recipient_id}: amount={record.payable_amount}"
        )
        return record

    async def settle_receivable(self, receivable_id: str) -> ActionResult:
        """Mark a receivable as fully received and credit the wallet.

        The outstanding balance is credited to the wallet and recorded in the
        payment history; the receivable ends with a zero balance. Settling an
        already received receivable is a successful no-op.

        Args:
            receivable_id: Receivable to settle

        Returns:
            ActionResult
        """

        async def settle(session: AsyncSession) -> Decimal | None:
            receivable = await get_receivable_for_update(session, receivable_id)
            if receivable is None:
                raise ReceivableNotFoundError()
            if receivable.status == ReceivableStatus.RECEIVED:
                return None

            amount = receivable.pending_amount
            summary = await get_or_create_summary(session)
            summary.total_balance = summary.total_balance + amount
            # revenue is booked at sale time and stays unchanged here
            receivable.pending_amount = Decimal("0")
            receivable.status = ReceivableStatus.RECEIVED
            session.add(
                _history_entry(
                    f"Received from {receivable.partner_name}",
                    amount,
                    "System",
                    PaymentDirection.CREDIT,
                )
            )
            return amount

        amount, failure = await self._run_action(settle, f"Settlement of receivable {receivable_id}")
        if failure is not None:
            return failure
        if amount is None:
            logger.info(f"Receivable {receivable_id} already marked as Received")
            return ActionResult.ok("Receivable already marked as received.")
        logger.info(f"Settled receivable {receivable_id}: credited {amount} to wallet")
        return ActionResult.ok("Receivable marked as received.")

    async def pay_payable(self, payable_id: str) -> ActionResult:
        """Pay a pending payable out of the wallet.

        Args:
            payable_id: Payable to pay

        Returns:
            ActionResult; INSUFFICIENT_BALANCE when the wallet cannot cover it
        """

        async def pay(session: AsyncSession) -> Decimal | None:
            stmt = select(Payable).where(Payable.id == payable_id).with_for_update()
            payable = (await session.execute(stmt)).scalar_one_or_none()
            if payable is None:
                raise PayableNotFoundError()
            if payable.status == PayableStatus.PAID:
                return None

            amount = payable.payable_amount
            summary = await get_or_create_summary(session)
            if summary.total_balance < amount:
                raise InsufficientBalanceError()

            payable.status = PayableStatus.PAID
            summary.total_balance = summary.total_balance - amount
            session.add(
                _history_entry(
                    f"Paid to {payable.recipient_name}",
                    amount,
                    PaymentMethod.WALLET.value,
                    PaymentDirection.DEBIT,
                )
            )
            return amount

        amount, failure = await self._run_action(pay, f"Payment of payable {payable_id}")
        if failure is not None:
            return failure
        if amount is None:
            logger.info(f"Payable {payable_id} already marked as Paid")
            return ActionResult.ok("Payable already marked as paid.")
        logger.info(f"Paid payable {payable_id}: debited {amount} from wallet")
        return ActionResult.ok("Payable marked as paid.")

    async def manage_wallet_transaction(
        self, request: WalletTransactionRequest | Mapping[str, Any]
    ) -> ActionResult:
        """Top up the wallet, record money received, or send money out.

        - Topup wallet: credits the balance
        - Receive from partner/customer: credits the balance and revenue
        - Send to partner/customer: debits the balance, rejected when it cannot cover it

        Each movement is recorded in the payment history with its payment method.

        Args:
            request: action, amount, payment method and (except top-ups) recipient id

        Returns:
            ActionResult
        """
        try:
            data = WalletTransactionRequest.model_validate(request)
        except ValidationError as e:
            logger.warning(f"Invalid wallet transaction: {e.error_count()} validation error(s)")
            return ActionResult.fail(ErrorCode.VALIDATION_ERROR, "Invalid input.")

        async def apply(session: AsyncSession) -> None:
            summary = await get_or_create_summary(session)
            if data.action is WalletAction.TOPUP:
                name = "Wallet Top-up"
            else:
                name = f"{RECIPIENT_LABELS[data.action]}: {data.recipient_id}"

            if data.action.is_credit:
                summary.total_balance = summary.total_balance + data.amount
                if data.action is not WalletAction.TOPUP:
                    summary.revenue = summary.revenue + data.amount
                direction = PaymentDirection.CREDIT
            else:
                if summary.total_balance < data.amount:
                    raise InsufficientBalanceError()
                summary.total_balance = summary.total_balance - data.amount
                direction = PaymentDirection.DEBIT

            session.add(_history_entry(name, data.amount, data.payment_method.value, direction))

        _, failure = await self._run_action(apply, f"Wallet transaction '{data.action.value}'")
        if failure is not None:
            return failure
        logger.info(
            f"Wallet transaction '{data.action.value}' of {data.amount} "
            f"via {data.payment_method.value} recorded"
        )
        return ActionResult.ok(
            f"Transaction '{data.action.value}' of {data.amount} INR was successful."
        )

    async def make_ad_hoc_payment(
        self, request: AdHocPaymentRequest | Mapping[str, Any]
    ) -> ActionResult:
        """Record a one-off payout to a partner.

        Creates an already Paid payable and a Debit history entry. The wallet is
        debited only when the payment method is Wallet.

        Args:
            request: recipient, amount and payment method

        Returns:
            ActionResult; INSUFFICIENT_BALANCE when a wallet payout cannot be covered
        """
        try:
            data = AdHocPaymentRequest.model_validate(request)
        except ValidationError as e:
            logger.warning(f"Invalid ad-hoc payment: {e.error_count()} validation error(s)")
            return ActionResult.fail(ErrorCode.VALIDATION_ERROR, "Invalid input.")

        async def pay(session: AsyncSession) -> None:
            if data.payment_method is PaymentMethod.WALLET:
                summary = await get_or_create_summary(session)
                if summary.total_balance < data.amount:
                    raise InsufficientBalanceError()
                summary.total_balance = summary.total_balance - data.amount

            session.add(
                Payable(
                    entry_date=date.today(),
                    recipient_name=data.recipient_name,
                    recipient_id=data.recipient_id,
                    payable_amount=data.amount,
                    status=PayableStatus.PAID,
                    description=f"Ad-hoc payment to {data.recipient_name}",
                )
            )
            session.add(
                _history_entry(
                    f"Paid to {data.recipient_name}",
                    data.amount,
                    data.payment_method.value,
                    PaymentDirection.DEBIT,
                )
            )

        _, failure = await self._run_action(pay, f"Ad-hoc payment to {data.recipient_id}")
        if failure is not None:
            return failure
        logger.info(
            f"Ad-hoc payment of {data.amount} to {data.recipient_id} "
            f"via {data.payment_method.value} recorded"
        )
        return ActionResult.ok("Payment recorded successfully.")


__all__ = ["WalletService", "get_or_create_summary", "new_transaction_id"]
