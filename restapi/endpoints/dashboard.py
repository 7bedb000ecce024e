"""Dashboard endpoint for the API."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.analytics.calculations import monthly_rollup
from components.analytics import schemas
from components.budget.repository import BudgetRepository
from components.budget.sync import budget_month_summary, sync_spent_amounts
from components.core.config import Settings
from components.core.formatters import format_month_label, get_current_month
from components.core.init_db import get_app_settings, get_db
from components.core.schemas import MONTH_KEY_PATTERN
from components.goal.progress import goals_summary
from components.goal.repository import GoalRepository
from components.transaction.repository import TransactionRepository

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get("/", response_model=schemas.Dashboard)
async def read_dashboard(
    month: Optional[str] = Query(None, pattern=MONTH_KEY_PATTERN, description="Defaults to the current month"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Get the dashboard of a month.

    Returns the income/expense rollup of the month, the most recent
    transactions, the budget overview of the month and the goals summary.
    """
    month = month or get_current_month()

    transactions = await TransactionRepository(db).get_all()
    budget_repo = BudgetRepository(db)
    budgets = await sync_spent_amounts(budget_repo, await budget_repo.get_all(month), transactions)
    goals = await GoalRepository(db).get_all()

    return schemas.Dashboard(
        month_label=format_month_label(month),
        rollup=monthly_rollup(transactions, month),
        recent_transactions=transactions[:settings.RECENT_TRANSACTIONS_LIMIT],
        budget_overview=budget_month_summary(budgets, month),
        goals=goals_summary(goals),
    )
