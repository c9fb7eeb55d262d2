from app.services.ingestion import IngestionService
from app.services.midtrans import MidtransClient, get_midtrans_client
from app.services.reconciliation import TransactionLookupService
from app.services.transactions import TransactionService

__all__ = [
    "IngestionService",
    "MidtransClient",
    "get_midtrans_client",
    "TransactionLookupService",
    "TransactionService",
]
