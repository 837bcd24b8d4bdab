"""Main application entry point."""

import argparse
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from partnerdesk.api import pending_payments, wallet
from partnerdesk.models import Base
from partnerdesk.services import async_engine
from partnerdesk.services.config import settings
from partnerdesk.services.logging import setup_server_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")
    yield
    await async_engine.dispose()
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.api_title,
    description="Partner receivables, collections and wallet back office",
    version=settings.api_version,
    lifespan=lifespan,
)

app.include_router(pending_payments.router)
app.include_router(wallet.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


def main() -> None:
    """Run the API server."""
    parser = argparse.ArgumentParser(description="partnerdesk API server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    args = parser.parse_args()

    setup_server_logging(settings.log_file, settings.log_level)
    logger.info(f"Starting API server on {args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
