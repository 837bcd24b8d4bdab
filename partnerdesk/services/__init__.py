"""Database connection and session management."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from partnerdesk.services.config import settings

DATABASE_URL = settings.database_url

# Request handling uses the async engine; Alembic builds its own sync engine from DATABASE_URL
if DATABASE_URL.startswith("sqlite"):
    async_engine = create_async_engine(
        settings.async_database_url,
        echo=settings.database_echo,
        connect_args={"check_same_thread": False},
    )
else:
    async_engine = create_async_engine(
        settings.async_database_url, echo=settings.database_echo, pool_pre_ping=True
    )

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory used by services (one fresh session per transaction attempt)."""
    return AsyncSessionLocal


__all__ = [
    "async_engine",
    "AsyncSessionLocal",
    "get_session_factory",
]
