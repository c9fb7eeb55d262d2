from app.models.transaction import Transaction
from app.models.transaction_item import TransactionItem

__all__ = ["Transaction", "TransactionItem"]
