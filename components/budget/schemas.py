"""Pydantic schemas for budget data validation."""

import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from components.core.schemas import MONTH_KEY_PATTERN, RecordModel


def validate_month_key(value: str) -> str:
    value = value.strip()
    if not re.match(MONTH_KEY_PATTERN, value):
        raise ValueError(f"Month must be in YYYY-MM format (got {value!r})")
    return value


class BudgetBase(RecordModel):
    """Base budget schema."""
    category: str
    monthly_limit: float = Field(..., allow_inf_nan=False)
    month: str

    @field_validator("category")
    @classmethod
    def category_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please select a category")
        return value

    @field_validator("month")
    @classmethod
    def month_format(cls, value: str) -> str:
        return validate_month_key(value)


class BudgetCreate(BudgetBase):
    """Schema for budget creation; ``spent`` is never accepted from the client."""

    @field_validator("monthly_limit")
    @classmethod
    def limit_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Please enter a valid budget amount")
        return value


class BudgetUpdate(RecordModel):
    """Schema for a partial budget update."""
    category: Optional[str] = None
    monthly_limit: Optional[float] = Field(None, allow_inf_nan=False)
    month: Optional[str] = None

    @field_validator("monthly_limit")
    @classmethod
    def limit_positive(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("Please enter a valid budget amount")
        return value

    @field_validator("month")
    @classmethod
    def month_format(cls, value: Optional[str]) -> Optional[str]:
        return validate_month_key(value) if value is not None else value


class Budget(BudgetBase):
    """Schema for budget response."""
    id: int
    spent: float = 0

    class Config:
        from_attributes = True


class BudgetStatus(BaseModel):
    """Budget together with its derived usage figures."""
    budget: Budget
    percentage: float
    percentage_label: str
    remaining: float
    is_over_budget: bool
    level: str  # ok | warning | over


class BudgetSummary(BaseModel):
    """Totals for the budgets of one month."""
    month: str
    budget_count: int
    total_budget: float
    total_spent: float
    remaining: float
    percentage_used: float
    is_over_budget: bool


class BudgetMonthReport(BaseModel):
    """Budgets page payload: per-budget status plus the month summary."""
    summary: BudgetSummary
    budgets: List[BudgetStatus]


class BudgetUploadError(BaseModel):
    """Schema for budget upload error."""
    row: int
    message: str


class BudgetUploadResponse(BaseModel):
    """Schema for budget upload response."""
    success: bool
    message: str
    errors: Optional[List[BudgetUploadError]] = None
