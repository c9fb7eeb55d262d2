from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, Field


class TransactionItemBase(BaseModel):
    product_name: str = Field(..., min_length=1, description="Name of the purchased product")
    qty: int = Field(..., ge=1, description="Purchased quantity")
    amount: Decimal = Field(..., ge=0, description="Line amount")


class TransactionItemCreate(TransactionItemBase):
    pass


class TransactionItemResponse(TransactionItemBase):
    id: str
    transaction_id: str
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class TransactionBase(BaseModel):
    customer_name: str = Field(..., description="Buyer name")
    customer_email: Optional[str] = Field(None, description="Buyer email")
    customer_phone: Optional[str] = Field(None, description="Buyer phone number")
    total_amount: Decimal = Field(..., ge=0, description="Amount charged for the whole order")
    status: str = Field(..., min_length=1, description="Free-form status, e.g. pending | completed")


class TransactionCreate(TransactionBase):
    id: Optional[str] = Field(None, description="Explicit identifier; generated when omitted")
    is_read: bool = False
    created_at: Optional[datetime] = None
    items: list[TransactionItemCreate] = []


class TransactionResponse(TransactionBase):
    id: str
    is_read: bool = Field(..., alias="isRead")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class TransactionDetail(BaseModel):
    """A local transaction with its items and the matched Midtrans record."""
    transaction: TransactionResponse
    transaction_items: list[TransactionItemResponse] = Field(alias="transactionItems")
    midtrans_data: Optional[dict[str, Any]] = Field(None, alias="midtransData")

    class Config:
        populate_by_name = True


class TransactionList(BaseModel):
    transactions: list[TransactionResponse] = Field(alias="Transactions")
    transaction_items: list[TransactionItemResponse] = Field(alias="TransactionItems")

    class Config:
        populate_by_name = True
