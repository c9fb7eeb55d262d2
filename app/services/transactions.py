"""Queries over locally stored transactions and their items."""
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_

from app.models import Transaction, TransactionItem
from app.config import settings
from app.schemas.transaction import TransactionList, TransactionResponse, TransactionItemResponse
from app.utils.errors import InvalidArgument, NotFound, NoPendingNotification


class TransactionService:
    """Read-only access to transactions and their line items."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        result = await self.db.execute(
            select(Transaction).where(Transaction.id == transaction_id)
        )
        return result.scalar_one_or_none()

    async def get_items(self, transaction_ids: Sequence[str]) -> list[TransactionItem]:
        """Get the items of all given transactions in a single query."""
        if not transaction_ids:
            return []
        result = await self.db.execute(
            select(TransactionItem)
            .where(TransactionItem.transaction_id.in_(transaction_ids))
            .order_by(TransactionItem.transaction_id, TransactionItem.created_at)
        )
        return list(result.scalars().all())

    async def list_by_status(self, status: Optional[str]) -> TransactionList:
        """Transactions with exactly this status, newest first, with their items."""
        if not status or not status.strip():
            raise InvalidArgument("Status parameter is required")

        result = await self.db.execute(
            select(Transaction)
            .where(Transaction.status == status)
            .order_by(Transaction.created_at.desc(), Transaction.id)
        )
        transactions = list(result.scalars().all())
        if not transactions:
            raise NotFound(f"No transactions found with status '{status}'")

        return await self._with_items(transactions)

    async def list_all(self) -> TransactionList:
        """Every transaction, newest first, with their items."""
        result = await self.db.execute(
            select(Transaction).order_by(Transaction.created_at.desc(), Transaction.id)
        )
        transactions = list(result.scalars().all())
        if not transactions:
            raise NotFound("No transactions found")

        return await self._with_items(transactions)

    async def next_unread_completed(self) -> Transaction:
        """Oldest completed transaction that has not been read yet."""
        result = await self.db.execute(
            select(Transaction)
            .where(
                and_(
                    Transaction.status == settings.COMPLETED_STATUS,
                    Transaction.is_read.is_(False),
                )
            )
            .order_by(Transaction.created_at.asc(), Transaction.id)
            .limit(1)
        )
        transaction = result.scalar_one_or_none()
        if transaction is None:
            raise NoPendingNotification("No transaction found")
        return transaction

    async def _with_items(self, transactions: list[Transaction]) -> TransactionList:
        items = await self.get_items([txn.id for txn in transactions])
        return TransactionList(
            transactions=[TransactionResponse.model_validate(txn) for txn in transactions],
            transaction_items=[TransactionItemResponse.model_validate(item) for item in items],
        )
