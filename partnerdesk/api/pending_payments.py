"""Pending payments API: partner receivable listing and collections."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response

from partnerdesk.api.deps import get_receivable_service
from partnerdesk.schemas.receivables import ReceivableRecord
from partnerdesk.services.auth_service import (
    RequestContext,
    Role,
    partner_identifiers,
    require_roles,
    resolve_partner_id,
)
from partnerdesk.services.errors import ActionResult
from partnerdesk.services.receivable_service import ReceivableService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pending-payments", tags=["pending-payments"])


@router.get("", response_model=list[ReceivableRecord])
async def list_pending_payments(
    partner_id: str | None = Query(default=None),
    context: RequestContext = Depends(require_roles(Role.ADMIN, Role.PARTNER)),  # noqa: B008
    service: ReceivableService = Depends(get_receivable_service),  # noqa: B008
) -> list[ReceivableRecord]:
    """List pending receivables of a partner.

    Partners see their own; admins pass `partner_id`.
    """
    resolved = resolve_partner_id(context, partner_id)
    receivables = await service.list_pending_receivables(resolved)
    logger.debug(
        f"pending_payments.list: user_id={context.user_id} partner_id={resolved} "
        f"count={len(receivables)}"
    )
    return receivables


@router.post("/collect", response_model=ActionResult)
async def collect_pending_payment(
    response: Response,
    body: dict[str, Any] = Body(...),  # noqa: B008
    context: RequestContext = Depends(require_roles(Role.ADMIN, Role.PARTNER)),  # noqa: B008
    service: ReceivableService = Depends(get_receivable_service),  # noqa: B008
) -> ActionResult:
    """Record a payment collected against a receivable.

    Body: {"receivableId": "...", "amountCollected": 200}

    Partners may only collect on their own receivables.
    """
    partner_ids = None if context.is_admin else partner_identifiers(context)
    result = await service.collect_payment(body, partner_ids=partner_ids)
    response.status_code = result.http_status
    if result.success:
        logger.info(f"User {context.user_id} collected payment on {body.get('receivableId')}")
    return result
