import uuid
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import inspect

from app.models import Transaction, TransactionItem
from app.schemas.transaction import TransactionCreate, TransactionItemCreate
from app.services.ingestion import IngestionService
from app.services.transactions import TransactionService
from app.utils.errors import InvalidArgument, NoPendingNotification, NotFound


def transaction_payload(**overrides) -> TransactionCreate:
    fields = {
        "customer_name": "Budi Santoso",
        "customer_email": "budi@example.com",
        "total_amount": Decimal("125000.00"),
        "status": "pending",
        "created_at": datetime(2025, 2, 11, 14, 40),
        "items": [TransactionItemCreate(product_name="Festival Pass", qty=1, amount=Decimal("125000.00"))],
    }
    fields.update(overrides)
    return TransactionCreate(**fields)


class TestIngestionService:
    @pytest.mark.anyio
    async def test_ingests_transactions_with_items(self, db_session):
        txn_id = str(uuid.uuid4())
        service = IngestionService(db_session)

        ingested, errors = await service.ingest_transactions([transaction_payload(id=txn_id)])

        assert ingested == 1
        assert errors == []
        items = await TransactionService(db_session).get_items([txn_id])
        assert [(i.product_name, i.qty) for i in items] == [("Festival Pass", 1)]

    @pytest.mark.anyio
    async def test_generates_missing_ids(self, db_session):
        service = IngestionService(db_session)

        ingested, errors = await service.ingest_transactions([transaction_payload(), transaction_payload()])

        assert ingested == 2
        assert errors == []

    @pytest.mark.anyio
    async def test_duplicate_ids_are_reported(self, db_session):
        txn_id = str(uuid.uuid4())
        service = IngestionService(db_session)

        ingested, errors = await service.ingest_transactions(
            [transaction_payload(id=txn_id), transaction_payload(id=txn_id)]
        )

        assert ingested == 1
        assert errors == [f"Transaction {txn_id} already exists"]

    @pytest.mark.anyio
    async def test_invalid_ids_are_reported(self, db_session):
        service = IngestionService(db_session)

        ingested, errors = await service.ingest_transactions([transaction_payload(id="ORDER-1")])

        assert ingested == 0
        assert errors == ["Transaction ORDER-1 has an invalid identifier"]


class TestTransactionService:
    def test_models_carry_no_relationships(self):
        assert len(inspect(Transaction).relationships) == 0
        assert len(inspect(TransactionItem).relationships) == 0

    @pytest.mark.anyio
    async def test_get_transaction(self, db_session, make_transaction):
        txn = await make_transaction()
        service = TransactionService(db_session)

        found = await service.get_transaction(txn.id)

        assert isinstance(found, Transaction)
        assert found.id == txn.id
        assert await service.get_transaction(str(uuid.uuid4())) is None

    @pytest.mark.anyio
    async def test_get_items_batches_several_transactions(self, db_session, make_transaction):
        a = await make_transaction(items=(("Festival Pass", 1, "100000.00"),))
        b = await make_transaction(items=(("Tote Bag", 2, "40000.00"), ("Lanyard", 1, "15000.00")))
        await make_transaction(items=(("Poster", 1, "25000.00"),))

        items = await TransactionService(db_session).get_items([a.id, b.id])

        assert sorted(i.product_name for i in items) == ["Festival Pass", "Lanyard", "Tote Bag"]

    @pytest.mark.anyio
    async def test_get_items_without_ids(self, db_session):
        assert await TransactionService(db_session).get_items([]) == []

    @pytest.mark.anyio
    async def test_list_by_status_requires_status(self, db_session):
        service = TransactionService(db_session)
        with pytest.raises(InvalidArgument):
            await service.list_by_status(None)
        with pytest.raises(InvalidArgument):
            await service.list_by_status("")

    @pytest.mark.anyio
    async def test_list_by_status_newest_first(self, db_session, make_transaction):
        t1 = await make_transaction(status="completed", created_at=datetime(2025, 1, 1))
        t3 = await make_transaction(status="completed", created_at=datetime(2025, 1, 3))
        t2 = await make_transaction(status="completed", created_at=datetime(2025, 1, 2))

        result = await TransactionService(db_session).list_by_status("completed")

        assert [t.id for t in result.transactions] == [t3.id, t2.id, t1.id]

    @pytest.mark.anyio
    async def test_list_all_empty(self, db_session):
        with pytest.raises(NotFound, match="No transactions found"):
            await TransactionService(db_session).list_all()

    @pytest.mark.anyio
    async def test_next_unread_completed_is_fifo(self, db_session, make_transaction):
        a = await make_transaction(status="completed", created_at=datetime(2025, 1, 1))
        await make_transaction(status="completed", created_at=datetime(2025, 1, 2))

        result = await TransactionService(db_session).next_unread_completed()

        assert result.id == a.id

    @pytest.mark.anyio
    async def test_next_unread_completed_none(self, db_session, make_transaction):
        await make_transaction(status="pending")

        with pytest.raises(NoPendingNotification):
            await TransactionService(db_session).next_unread_completed()
