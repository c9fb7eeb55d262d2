import os
import uuid
from datetime import datetime
from decimal import Decimal

# Point settings at SQLite before any app module reads them
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from httpx import AsyncClient, ASGITransport

from app.database import Base, build_engine, build_session_factory, get_db
from app.main import app
from app.models import Transaction, TransactionItem
from app.services.midtrans import MidtransClient, get_midtrans_client

MIDTRANS_TEST_URL = "https://midtrans.test/midtrans/get-data"


class FakeMidtrans:
    """Serves a configurable relay payload and counts the requests it receives."""

    def __init__(self):
        self.payload = {"data": []}
        self.status_code = 200
        self.raw_body = None
        self.error = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def client(self) -> MidtransClient:
        return MidtransClient(
            data_url=MIDTRANS_TEST_URL,
            param="VAILOVENT",
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def midtrans():
    return FakeMidtrans()


@pytest.fixture
async def db_session():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = build_session_factory(engine)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def make_transaction(db_session):
    """Factory inserting a transaction with optional (product_name, qty, amount) items."""

    async def _make(
        status: str = "completed",
        is_read: bool = False,
        created_at: datetime = datetime(2025, 1, 1, 12, 0, 0),
        items: tuple = (),
        customer_name: str = "Rina Wijaya",
    ) -> Transaction:
        txn = Transaction(
            id=str(uuid.uuid4()),
            customer_name=customer_name,
            customer_email="rina@example.com",
            total_amount=Decimal("100000.00"),
            status=status,
            is_read=is_read,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(txn)
        await db_session.flush()
        for product_name, qty, amount in items:
            db_session.add(TransactionItem(
                transaction_id=txn.id,
                product_name=product_name,
                qty=qty,
                amount=Decimal(amount),
            ))
        await db_session.commit()
        txn_id = txn.id
        # Later queries load fresh rows, server defaults included
        db_session.expunge_all()
        return await db_session.get(Transaction, txn_id)

    return _make


@pytest.fixture
async def client(db_session, midtrans):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_midtrans_client] = midtrans.client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
