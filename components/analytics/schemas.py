"""Pydantic schemas for dashboard and chart data."""

from typing import List, Optional

from pydantic import BaseModel

from components.budget.schemas import BudgetSummary
from components.goal.schemas import GoalsSummary
from components.transaction.schemas import Transaction


class MonthlyRollup(BaseModel):
    """Income/expense totals for one month."""
    month: str
    total_income: float
    total_expenses: float
    net_income: float
    savings_rate: float
    transaction_count: int


class CategoryTotal(BaseModel):
    """One slice of the expense breakdown."""
    category: str
    total: float
    percentage: float
    display_total: Optional[str] = None


class TrendSeries(BaseModel):
    """Per-month income and expenses over a trailing window, oldest first."""
    month_keys: List[str]
    labels: List[str]
    income: List[float]
    expenses: List[float]


class Dashboard(BaseModel):
    """Dashboard payload."""
    month_label: str
    rollup: MonthlyRollup
    recent_transactions: List[Transaction]
    budget_overview: BudgetSummary
    goals: GoalsSummary
