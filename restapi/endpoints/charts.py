"""Chart data endpoints for the API."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.analytics.calculations import (
    category_breakdown,
    monthly_rollup,
    transactions_in_month,
    trend_series,
)
from components.analytics import schemas
from components.core.config import Settings
from components.core.formatters import format_currency
from components.core.init_db import get_app_settings, get_db
from components.core.schemas import MONTH_KEY_PATTERN, TransactionType
from components.transaction.repository import TransactionRepository

router = APIRouter(
    prefix="/charts",
    tags=["charts"],
)


@router.get("/expenses", response_model=List[schemas.CategoryTotal])
async def read_expense_breakdown(
    month: Optional[str] = Query(None, pattern=MONTH_KEY_PATTERN, description="Only expenses of this month"),
    limit: Optional[int] = Query(None, ge=1, description="Number of categories to keep"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Get expense totals per category, largest first, for a pie chart."""
    transactions = await TransactionRepository(db).get_all(TransactionType.EXPENSE)
    if month:
        transactions = transactions_in_month(transactions, month)

    slices = category_breakdown(transactions, limit or settings.TOP_CATEGORY_LIMIT)
    return [
        item.model_copy(update={"display_total": format_currency(item.total, settings.CURRENCY_SYMBOL)})
        for item in slices
    ]


@router.get("/trend", response_model=schemas.TrendSeries)
async def read_trend(
    months: Optional[int] = Query(None, ge=1, le=120, description="Number of trailing months"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Get monthly income and expenses over the trailing months, oldest first."""
    transactions = await TransactionRepository(db).get_all()
    return trend_series(transactions, months or settings.TREND_MONTHS)


@router.get("/rollup", response_model=schemas.MonthlyRollup)
async def read_rollup(
    month: Optional[str] = Query(None, pattern=MONTH_KEY_PATTERN, description="Defaults to the current month"),
    db: AsyncSession = Depends(get_db),
):
    """Get income, expenses, net income and savings rate of a month."""
    transactions = await TransactionRepository(db).get_all()
    return monthly_rollup(transactions, month)
