"""Lookup of a local transaction cross-referenced with its Midtrans record."""
import logging
import uuid
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.schemas.transaction import TransactionDetail, TransactionResponse, TransactionItemResponse
from app.services.midtrans import MidtransClient
from app.services.transactions import TransactionService
from app.utils.errors import InvalidArgument, NotFound

logger = logging.getLogger(__name__)

MATCH_FOUND_MESSAGE = "Matching transaction found"
NO_MATCH_MESSAGE = "No matching transaction found in Midtrans"


def is_valid_transaction_id(transaction_id: Optional[str]) -> bool:
    """Check that the value is a canonical UUID string as generated by the store."""
    if not transaction_id:
        return False
    try:
        return str(uuid.UUID(transaction_id)) == transaction_id
    except (ValueError, TypeError, AttributeError):
        return False


def build_order_id(transaction_id: str, prefix: Optional[str] = None) -> str:
    """Derive the Midtrans order id of a local transaction."""
    return f"{prefix if prefix is not None else settings.ORDER_ID_PREFIX}{transaction_id}"


def select_provider_record(records: list, order_id: str) -> Optional[dict[str, Any]]:
    """First provider record whose order_id equals ``order_id``, in provider order."""
    for record in records:
        if isinstance(record, dict) and record.get("order_id") == order_id:
            return record
    return None


class TransactionLookupService:
    """Loads a transaction and its items and attaches the matching Midtrans record."""

    def __init__(
        self,
        db: AsyncSession,
        midtrans_client: MidtransClient,
        order_id_prefix: Optional[str] = None,
    ):
        self.transactions = TransactionService(db)
        self.midtrans_client = midtrans_client
        self.order_id_prefix = order_id_prefix if order_id_prefix is not None else settings.ORDER_ID_PREFIX

    async def lookup_by_id(self, transaction_id: Optional[str]) -> tuple[TransactionDetail, str]:
        """Return the combined transaction detail and the message describing the match.

        The provider is only contacted once the id is valid and the local
        transaction exists. A missing provider match is not an error.
        """
        if not is_valid_transaction_id(transaction_id):
            raise InvalidArgument("Invalid or missing Transaction ID")

        transaction = await self.transactions.get_transaction(transaction_id)
        if transaction is None:
            raise NotFound("Transaction not found")

        items = await self.transactions.get_items([transaction.id])

        records = await self.midtrans_client.fetch_transactions()
        order_id = build_order_id(transaction_id, self.order_id_prefix)
        matched = select_provider_record(records, order_id)

        if matched is None:
            logger.info(f"No Midtrans record for order {order_id} among {len(records)} records")

        detail = TransactionDetail(
            transaction=TransactionResponse.model_validate(transaction),
            transaction_items=[TransactionItemResponse.model_validate(item) for item in items],
            midtrans_data=matched,
        )
        return detail, MATCH_FOUND_MESSAGE if matched is not None else NO_MATCH_MESSAGE
