"""Wallet & billing API: admin wallet operations and partner earnings."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response

from partnerdesk.api.deps import get_receivable_service, get_wallet_service
from partnerdesk.schemas.receivables import ReceivableRecord
from partnerdesk.schemas.wallet import (
    PartnerWalletView,
    PayableRecord,
    PaymentHistoryRecord,
    WalletSummaryView,
)
from partnerdesk.services.auth_service import (
    RequestContext,
    Role,
    require_roles,
    resolve_partner_id,
)
from partnerdesk.services.errors import ActionResult
from partnerdesk.services.receivable_service import ReceivableService
from partnerdesk.services.wallet_service import WalletService

router = APIRouter(prefix="/api/wallet", tags=["wallet"])

admin_only = require_roles(Role.ADMIN)


@router.get("/summary", response_model=WalletSummaryView)
async def get_summary(
    context: RequestContext = Depends(admin_only),  # noqa: B008
    service: WalletService = Depends(get_wallet_service),  # noqa: B008
) -> WalletSummaryView:
    return await service.get_wallet_summary()


@router.get("/receivables", response_model=list[ReceivableRecord])
async def list_receivables(
    context: RequestContext = Depends(admin_only),  # noqa: B008
    service: ReceivableService = Depends(get_receivable_service),  # noqa: B008
) -> list[ReceivableRecord]:
    return await service.list_receivables()


@router.get("/payables", response_model=list[PayableRecord])
async def list_payables(
    context: RequestContext = Depends(admin_only),  # noqa: B008
    service: WalletService = Depends(get_wallet_service),  # noqa: B008
) -> list[PayableRecord]:
    return await service.list_payables()


@router.get("/history", response_model=list[PaymentHistoryRecord])
async def list_history(
    context: RequestContext = Depends(admin_only),  # noqa: B008
    service: WalletService = Depends(get_wallet_service),  # noqa: B008
) -> list[PaymentHistoryRecord]:
    return await service.list_payment_history()


@router.post("/receivables/{receivable_id}/settle", response_model=ActionResult)
async def settle_receivable(
    receivable_id: str,
    response: Response,
    context: RequestContext = Depends(admin_only),  # noqa: B008
    service: WalletService = Depends(get_wallet_service),  # noqa: B008
) -> ActionResult:
    """Mark a receivable as received in full."""
    result = await service.settle_receivable(receivable_id)
    response.status_code = result.http_status
    return result


@router.post("/payables/{payable_id}/pay", response_model=ActionResult)
async def pay_payable(
    payable_id: str,
    response: Response,
    context: RequestContext = Depends(admin_only),  # noqa: B008
    service: WalletService = Depends(get_wallet_service),  # noqa: B008
) -> ActionResult:
    """Pay a pending payable from the wallet."""
    result = await service.pay_payable(payable_id)
    response.status_code = result.http_status
    return result


@router.post("/transactions", response_model=ActionResult)
async def manage_wallet_transaction(
    response: Response,
    body: dict[str, Any] = Body(...),  # noqa: B008
    context: RequestContext = Depends(admin_only),  # noqa: B008
    service: WalletService = Depends(get_wallet_service),  # noqa: B008
) -> ActionResult:
    """Top up, receive into or send out of the wallet.

    Body: {"action": "Send to partner", "amount": 100, "paymentMethod": "upi", "recipientId": "P100"}
    """
    result = await service.manage_wallet_transaction(body)
    response.status_code = result.http_status
    return result


@router.post("/ad-hoc-payments", response_model=ActionResult)
async def make_ad_hoc_payment(
    response: Response,
    body: dict[str, Any] = Body(...),  # noqa: B008
    context: RequestContext = Depends(admin_only),  # noqa: B008
    service: WalletService = Depends(get_wallet_service),  # noqa: B008
) -> ActionResult:
    """Record a one-off payment to a partner.

    Body: {"recipientName": "...", "recipientId": "P100", "amount": 50, "paymentMethod": "cash"}
    """
    result = await service.make_ad_hoc_payment(body)
    response.status_code = result.http_status
    return result


@router.get("/partner", response_model=PartnerWalletView)
async def get_partner_wallet(
    partner_id: str | None = Query(default=None),
    context: RequestContext = Depends(require_roles(Role.ADMIN, Role.PARTNER)),  # noqa: B008
    service: WalletService = Depends(get_wallet_service),  # noqa: B008
) -> PartnerWalletView:
    """Commission earnings of a partner.

    Partners see their own; admins pass `partner_id`.
    """
    return await service.get_partner_wallet(resolve_partner_id(context, partner_id))
