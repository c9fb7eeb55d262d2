from app.schemas.envelope import ApiResponse
from app.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionItemCreate,
    TransactionItemResponse,
    TransactionDetail,
    TransactionList,
)

__all__ = [
    "ApiResponse",
    "TransactionCreate", "TransactionResponse",
    "TransactionItemCreate", "TransactionItemResponse",
    "TransactionDetail", "TransactionList",
]
