"""Budget endpoints for the API."""

import io
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.repository import BudgetRepository
from components.budget.sync import budget_month_summary, budget_status, sync_spent_amounts
from components.budget import schemas
from components.category.repository import CategoryRepository
from components.core.config import Settings
from components.core.formatters import get_current_month
from components.core.exceptions import RecordNotFoundError
from components.core.init_db import get_app_settings, get_db
from components.core.logger import get_logger
from components.core.schemas import MONTH_KEY_PATTERN, TransactionType
from components.transaction.repository import TransactionRepository
from restapi.endpoints.helpers import merge_update, require_category

logger = get_logger(__name__)

router = APIRouter(
    prefix="/budgets",
    tags=["budgets"],
    responses={404: {"description": "Not found"}},
)


async def _sync(db: AsyncSession, budgets: List[schemas.Budget]) -> List[schemas.Budget]:
    transactions = await TransactionRepository(db).get_all(TransactionType.EXPENSE)
    return await sync_spent_amounts(BudgetRepository(db), budgets, transactions)


async def _ensure_unique(repo: BudgetRepository, category: str, month: str, budget_id: Optional[int] = None) -> None:
    existing = await repo.get_by_category_and_month(category, month)
    if existing and existing.id != budget_id:
        raise HTTPException(
            status_code=400,
            detail=f"Budget already exists for {category} in {month}"
        )


@router.get("/", response_model=List[schemas.Budget])
async def read_budgets(
    month: Optional[str] = Query(None, pattern=MONTH_KEY_PATTERN, description="Month key YYYY-MM"),
    db: AsyncSession = Depends(get_db),
):
    """Get list of budgets, optionally for one month."""
    repo = BudgetRepository(db)
    return await repo.get_all(month)


@router.get("/status", response_model=schemas.BudgetMonthReport)
async def read_budget_status(
    month: Optional[str] = Query(None, pattern=MONTH_KEY_PATTERN, description="Defaults to the current month"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Get the budgets of a month with their usage.

    Spent amounts are resynchronized from the month's transactions first.
    Returns the monthly summary (total budget, total spent, remaining) and
    for every budget its percentage used, remaining amount and level.
    """
    month = month or get_current_month()
    budgets = await _sync(db, await BudgetRepository(db).get_all(month))
    return schemas.BudgetMonthReport(
        summary=budget_month_summary(budgets, month),
        budgets=[budget_status(budget, settings.BUDGET_WARNING_THRESHOLD) for budget in budgets],
    )


@router.post("/sync", response_model=List[schemas.Budget])
async def sync_budgets(
    month: Optional[str] = Query(None, pattern=MONTH_KEY_PATTERN, description="Only budgets of this month"),
    db: AsyncSession = Depends(get_db),
):
    """Recompute and store the spent amount of every budget (or of one month)."""
    budgets = await BudgetRepository(db).get_all(month)
    return await _sync(db, budgets)


@router.post("/insert", response_model=schemas.BudgetUploadResponse)
async def upload_budgets(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    """
    Upload budgets from a CSV file.

    The CSV file must have the following columns:
    - month: Month key in YYYY-MM format (e.g., 2024-03)
    - category: Name of an expense category
    - monthly_limit: Positive spending limit

    Validations:
    - Month must be a valid YYYY-MM key
    - Category must be a known expense category
    - Limit must be a positive number
    - Budget must not already exist for the month and category
    """
    if not file.filename or not file.filename.endswith(".csv"):
        return schemas.BudgetUploadResponse(
            success=False,
            message="Invalid file format. Only CSV files (.csv) are supported."
        )

    repo = BudgetRepository(db)

    file_content = await file.read()
    success, message, errors = await repo.upload_budgets_from_csv(io.BytesIO(file_content))

    if not success:
        logger.warning("Budget upload rejected: %s", message)
        error_objects = [schemas.BudgetUploadError(**error) for error in errors]
        return schemas.BudgetUploadResponse(
            success=False,
            message=message,
            errors=error_objects
        )

    await _sync(db, await repo.get_all())
    return schemas.BudgetUploadResponse(
        success=True,
        message=message
    )


@router.get("/{budget_id}", response_model=schemas.Budget)
async def read_budget(
    budget_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific budget by ID."""
    repo = BudgetRepository(db)
    budget = await repo.get_by_id(budget_id)
    if budget is None:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.post("/", response_model=schemas.Budget, status_code=201)
async def create_budget(
    budget: schemas.BudgetCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a budget; its spent amount is derived from existing transactions."""
    await require_category(CategoryRepository(db), budget.category, TransactionType.EXPENSE)

    repo = BudgetRepository(db)
    await _ensure_unique(repo, budget.category, budget.month)

    created = await repo.create(budget)
    synced, = await _sync(db, [created])
    return synced


@router.put("/{budget_id}", response_model=schemas.Budget)
async def update_budget(
    budget_id: int,
    budget: schemas.BudgetUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update the given fields of a budget."""
    repo = BudgetRepository(db)

    current = await repo.get_by_id(budget_id)
    if current is None:
        raise HTTPException(status_code=404, detail="Budget not found")

    merged = merge_update(current, budget, schemas.BudgetCreate)
    await require_category(CategoryRepository(db), merged.category, TransactionType.EXPENSE)
    await _ensure_unique(repo, merged.category, merged.month, budget_id)

    updated = await repo.update(budget_id, schemas.BudgetUpdate(**merged.model_dump()))
    if updated is None:
        raise RecordNotFoundError(f"Budget {budget_id} was deleted during the update")

    synced, = await _sync(db, [updated])
    return synced


@router.delete("/{budget_id}")
async def delete_budget(
    budget_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a budget."""
    repo = BudgetRepository(db)
    if not await repo.delete(budget_id):
        raise HTTPException(status_code=404, detail="Budget not found")
    return {"message": "Budget deleted successfully"}
