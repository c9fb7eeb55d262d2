import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.models import Transaction, TransactionItem
from app.schemas.transaction import TransactionCreate
from app.services.reconciliation import is_valid_transaction_id


class IngestionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def ingest_transactions(
        self, transactions: list[TransactionCreate]
    ) -> tuple[int, list[str]]:
        """Ingest transactions together with their items. Returns (count_ingested, errors)."""
        ingested = 0
        errors = []
        seen_ids: set[str] = set()

        for txn in transactions:
            txn_id = txn.id or str(uuid.uuid4())
            try:
                if not is_valid_transaction_id(txn_id):
                    errors.append(f"Transaction {txn_id} has an invalid identifier")
                    continue

                # Check if transaction already exists
                stmt = select(Transaction.id).where(Transaction.id == txn_id)
                result = await self.db.execute(stmt)
                existing = result.scalar_one_or_none()

                if existing or txn_id in seen_ids:
                    errors.append(f"Transaction {txn_id} already exists")
                    continue

                db_txn = Transaction(
                    id=txn_id,
                    customer_name=txn.customer_name,
                    customer_email=txn.customer_email,
                    customer_phone=txn.customer_phone,
                    total_amount=txn.total_amount,
                    status=txn.status,
                    is_read=txn.is_read,
                )
                if txn.created_at is not None:
                    db_txn.created_at = txn.created_at
                    db_txn.updated_at = txn.created_at
                self.db.add(db_txn)
                # Parent row first so the items' foreign key resolves
                await self.db.flush()

                for item in txn.items:
                    self.db.add(TransactionItem(
                        transaction_id=txn_id,
                        product_name=item.product_name,
                        qty=item.qty,
                        amount=item.amount,
                    ))

                seen_ids.add(txn_id)
                ingested += 1

            except Exception as e:
                errors.append(f"Error ingesting transaction {txn_id}: {str(e)}")

        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            errors.append(f"Database commit failed: {str(e)}")
            ingested = 0
        return ingested, errors
