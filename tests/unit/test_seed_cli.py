"""Tests for the seed CLI."""

import json
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from partnerdesk.cli.seed import SeedFileError, load_seed_file, seed
from partnerdesk.models import Payable, Receivable, ReceivableStatus

SEED_DATA = {
    "receivables": [
        {"id": "r1", "partner_id": "P100", "partner_name": "Asha", "total_amount": "500"},
        {
            "id": "r2",
            "partner_id": "P100",
            "total_amount": "300",
            "amount_paid": "300",
        },
    ],
    "payables": [{"id": "p1", "recipient_id": "P100", "payable_amount": "50"}],
}


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(SEED_DATA), encoding="utf-8")
    return path


class TestLoadSeedFile:
    """Test seed file parsing."""

    def test_parses_records(self, seed_file):
        receivables, payables = load_seed_file(seed_file)

        assert [r.id for r in receivables] == ["r1", "r2"]
        assert receivables[0].total_amount == Decimal("500")
        assert [p.id for p in payables] == ["p1"]

    def test_demo_seed_file_parses(self):
        demo = Path(__file__).resolve().parents[2] / "seeding" / "demo.json"

        receivables, payables = load_seed_file(demo)

        assert len(receivables) == 3
        assert len(payables) == 1

    def test_missing_lists_are_empty(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}", encoding="utf-8")

        assert load_seed_file(path) == ([], [])

    def test_missing_file(self, tmp_path):
        with pytest.raises(SeedFileError, match="Cannot read"):
            load_seed_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SeedFileError, match="not valid JSON"):
            load_seed_file(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(SeedFileError, match="JSON object"):
            load_seed_file(path)

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(
            json.dumps({"payables": [{"recipient_id": "P100", "payable_amount": "-1"}]}),
            encoding="utf-8",
        )

        with pytest.raises(SeedFileError, match="Invalid record"):
            load_seed_file(path)


class TestSeed:
    """Test seeding into a fresh database."""

    @pytest.mark.asyncio
    async def test_seed_creates_records(self, tmp_path, seed_file):
        engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'seeded.db'}", poolclass=NullPool
        )
        factory = async_sessionmaker(engine, expire_on_commit=False)

        exit_code = await seed(seed_file, session_factory=factory, engine=engine)

        assert exit_code == 0
        async with factory() as session:
            receivables = {
                r.id: r for r in (await session.execute(select(Receivable))).scalars().all()
            }
            payables = (await session.execute(select(Payable))).scalars().all()
        assert receivables["r1"].pending_amount == Decimal("500.00")
        assert receivables["r1"].status == ReceivableStatus.PENDING
        assert receivables["r2"].pending_amount == Decimal("0")
        assert receivables["r2"].status == ReceivableStatus.RECEIVED
        assert [p.id for p in payables] == ["p1"]
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_seed_bad_file_fails(self, tmp_path):
        engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'seeded.db'}", poolclass=NullPool
        )
        factory = async_sessionmaker(engine, expire_on_commit=False)

        exit_code = await seed(tmp_path / "absent.json", session_factory=factory, engine=engine)

        assert exit_code == 1
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_seed_duplicate_id_fails(self, tmp_path):
        path = tmp_path / "dupes.json"
        path.write_text(
            json.dumps(
                {
                    "receivables": [
                        {"id": "r1", "partner_id": "P100", "total_amount": "10"},
                        {"id": "r1", "partner_id": "P100", "total_amount": "20"},
                    ]
                }
            ),
            encoding="utf-8",
        )
        engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'seeded.db'}", poolclass=NullPool
        )
        factory = async_sessionmaker(engine, expire_on_commit=False)

        exit_code = await seed(path, session_factory=factory, engine=engine)

        assert exit_code == 1
        await engine.dispose()
