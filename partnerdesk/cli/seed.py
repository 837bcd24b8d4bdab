"""CLI entry point for seeding demo receivables and payables.

Usage:
    python -m partnerdesk.cli.seed seed.json

The JSON file holds two optional lists:
    {
        "receivables": [{"partner_id": "P100", "total_amount": "500", ...}],
        "payables": [{"recipient_id": "P100", "payable_amount": "50", ...}]
    }

Exit Codes:
    0 - Success: all records created
    1 - Failure: invalid file or database error
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from partnerdesk.models import Base
from partnerdesk.schemas.receivables import OpenReceivableRequest
from partnerdesk.schemas.wallet import OpenPayableRequest
from partnerdesk.services.config import settings
from partnerdesk.services.logging import setup_server_logging
from partnerdesk.services.receivable_service import ReceivableService
from partnerdesk.services.transactions import STORE_FAULTS
from partnerdesk.services.wallet_service import WalletService

logger = logging.getLogger(__name__)


class SeedFileError(ValueError):
    """Seed file missing or malformed."""


def load_seed_file(path: Path) -> tuple[list[OpenReceivableRequest], list[OpenPayableRequest]]:
    """Parse and validate a seed file.

    Raises:
        SeedFileError: File unreadable, not JSON, or records invalid
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SeedFileError(f"Cannot read seed file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SeedFileError(f"Seed file {path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise SeedFileError(f"Seed file {path} must contain a JSON object")

    try:
        receivables = [OpenReceivableRequest.model_validate(r) for r in raw.get("receivables", [])]
        payables = [OpenPayableRequest.model_validate(p) for p in raw.get("payables", [])]
    except ValidationError as e:
        raise SeedFileError(f"Invalid record in seed file {path}: {e}") from e
    return receivables, payables


async def seed(path: Path, session_factory=None, engine=None) -> int:
    """Create tables and insert the records of a seed file.

    Returns:
        Exit code: 0 for success, 1 for failure
    """
    if session_factory is None or engine is None:
        from partnerdesk.services import AsyncSessionLocal, async_engine

        session_factory = session_factory or AsyncSessionLocal
        engine = engine or async_engine

    try:
        receivables, payables = load_seed_file(path)
        logger.info(
            f"Seeding {len(receivables)} receivable(s) and {len(payables)} payable(s) from {path}"
        )

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        receivable_service = ReceivableService(session_factory)
        for data in receivables:
            await receivable_service.open_receivable(data)

        wallet_service = WalletService(session_factory)
        for data in payables:
            await wallet_service.open_payable(data)
    except SeedFileError as e:
        logger.error(str(e))
        return 1
    except STORE_FAULTS as e:
        logger.error(f"Seed failed: {e}", exc_info=True)
        return 1

    logger.info("Seed completed")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed partnerdesk demo data")
    parser.add_argument("seed_file", type=Path, help="JSON file with receivables/payables")
    parser.add_argument("--log-file", default="logs/seed.log", help="Log file path")
    args = parser.parse_args(argv)

    setup_server_logging(args.log_file, settings.log_level)
    return asyncio.run(seed(args.seed_file))


if __name__ == "__main__":
    sys.exit(main())
