"""Transaction endpoints for the API.

Every change to an expense transaction resynchronizes the spent amount of
the budgets whose (category, month) it touches.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.repository import BudgetRepository
from components.budget.sync import resync_for_transactions
from components.category.repository import CategoryRepository
from components.core.exceptions import RecordNotFoundError
from components.core.init_db import get_db
from components.core.schemas import MONTH_KEY_PATTERN, TransactionType
from components.transaction.repository import TransactionRepository
from components.transaction import schemas
from restapi.endpoints.helpers import merge_update, require_category

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.Transaction])
async def read_transactions(
    type: Literal["all", "income", "expense"] = Query("all", description="Filter by transaction type"),
    month: Optional[str] = Query(None, pattern=MONTH_KEY_PATTERN, description="Month key YYYY-MM"),
    db: AsyncSession = Depends(get_db),
):
    """Get list of transactions, newest first."""
    repo = TransactionRepository(db)
    transaction_type = None if type == "all" else TransactionType(type)
    return await repo.get_all(transaction_type=transaction_type, month=month)


@router.get("/{transaction_id}", response_model=schemas.Transaction)
async def read_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific transaction by ID."""
    repo = TransactionRepository(db)
    transaction = await repo.get_by_id(transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.post("/", response_model=schemas.Transaction, status_code=201)
async def create_transaction(
    transaction: schemas.TransactionCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record a new income or expense transaction."""
    await require_category(CategoryRepository(db), transaction.category, transaction.type)

    repo = TransactionRepository(db)
    created = await repo.create(transaction)
    await resync_for_transactions(BudgetRepository(db), repo, created)
    return created


@router.put("/{transaction_id}", response_model=schemas.Transaction)
async def update_transaction(
    transaction_id: int,
    transaction: schemas.TransactionUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update the given fields of a transaction."""
    repo = TransactionRepository(db)

    current = await repo.get_by_id(transaction_id)
    if current is None:
        raise HTTPException(status_code=404, detail="Transaction not found")

    merged = merge_update(current, transaction, schemas.TransactionCreate)
    await require_category(CategoryRepository(db), merged.category, merged.type)

    updated = await repo.update(transaction_id, schemas.TransactionUpdate(**merged.model_dump()))
    if updated is None:
        raise RecordNotFoundError(f"Transaction {transaction_id} was deleted during the update")

    await resync_for_transactions(BudgetRepository(db), repo, current, updated)
    return updated


@router.delete("/{transaction_id}")
async def delete_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a transaction."""
    repo = TransactionRepository(db)

    current = await repo.get_by_id(transaction_id)
    if current is None or not await repo.delete(transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")

    await resync_for_transactions(BudgetRepository(db), repo, current)
    return {"message": "Transaction deleted successfully"}
