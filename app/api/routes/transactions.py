from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.envelope import ApiResponse
from app.schemas.transaction import TransactionDetail, TransactionList, TransactionResponse
from app.services.midtrans import MidtransClient, get_midtrans_client
from app.services.reconciliation import TransactionLookupService
from app.services.transactions import TransactionService

router = APIRouter()


@router.get("", response_model=ApiResponse[TransactionList])
async def get_all_transactions(
    db: AsyncSession = Depends(get_db),
):
    """List every transaction, newest first, together with their items."""
    service = TransactionService(db)
    result = await service.list_all()
    return ApiResponse(success=True, message="Transactions successfully retrieved", data=result)


# Declared before "/{transaction_id}" so the literal path wins
@router.get("/pending-notification", response_model=ApiResponse[list[TransactionResponse]])
async def get_pending_notification(
    db: AsyncSession = Depends(get_db),
):
    """Oldest completed transaction not yet marked as read. Does not mark it."""
    service = TransactionService(db)
    transaction = await service.next_unread_completed()
    return ApiResponse(
        success=True,
        message="Transactions successfully retrieved",
        data=[TransactionResponse.model_validate(transaction)],
    )


@router.get("/status/{status}", response_model=ApiResponse[TransactionList])
async def get_transactions_by_status(
    status: str,
    db: AsyncSession = Depends(get_db),
):
    """List transactions with exactly this status, newest first."""
    service = TransactionService(db)
    result = await service.list_by_status(status)
    return ApiResponse(
        success=True,
        message=f"Transactions with status '{status}' successfully retrieved",
        data=result,
    )


@router.get("/{transaction_id}", response_model=ApiResponse[TransactionDetail])
async def get_transaction_by_id(
    transaction_id: str,
    db: AsyncSession = Depends(get_db),
    midtrans_client: MidtransClient = Depends(get_midtrans_client),
):
    """Get a transaction, its items and the matching Midtrans record, if any."""
    service = TransactionLookupService(db, midtrans_client)
    detail, message = await service.lookup_by_id(transaction_id)
    return ApiResponse(success=True, message=message, data=detail)
