"""Shared FastAPI dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from partnerdesk.services import get_session_factory
from partnerdesk.services.receivable_service import ReceivableService
from partnerdesk.services.wallet_service import WalletService


def get_receivable_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),  # noqa: B008
) -> ReceivableService:
    return ReceivableService(session_factory)


def get_wallet_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),  # noqa: B008
) -> WalletService:
    return WalletService(session_factory)
