"""Pydantic schemas for goal data validation."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from components.core.schemas import RecordModel


def _future_deadline(value: Optional[date]) -> Optional[date]:
    if value is not None and value <= date.today():
        raise ValueError("Deadline must be in the future")
    return value


class GoalBase(RecordModel):
    """Base goal schema."""
    name: str
    target_amount: float = Field(..., allow_inf_nan=False)
    current_amount: float = Field(0, allow_inf_nan=False)
    deadline: date


class GoalCreate(GoalBase):
    """Schema for goal creation."""

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter a goal name")
        return value

    @field_validator("target_amount")
    @classmethod
    def target_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Please enter a valid target amount")
        return value

    @field_validator("current_amount")
    @classmethod
    def current_not_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Please enter a valid current amount")
        return value

    @field_validator("deadline")
    @classmethod
    def deadline_in_future(cls, value: date) -> date:
        return _future_deadline(value)


class GoalUpdate(RecordModel):
    """Schema for a partial goal update."""
    name: Optional[str] = None
    target_amount: Optional[float] = Field(None, allow_inf_nan=False)
    current_amount: Optional[float] = Field(None, allow_inf_nan=False)
    deadline: Optional[date] = None

    @field_validator("name")
    @classmethod
    def name_required(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Please enter a goal name")
        return value

    @field_validator("target_amount")
    @classmethod
    def target_positive(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("Please enter a valid target amount")
        return value

    @field_validator("current_amount")
    @classmethod
    def current_not_negative(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value < 0:
            raise ValueError("Please enter a valid current amount")
        return value

    @field_validator("deadline")
    @classmethod
    def deadline_in_future(cls, value: Optional[date]) -> Optional[date]:
        return _future_deadline(value)


class Goal(GoalBase):
    """Schema for goal response."""
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AddMoneyRequest(BaseModel):
    """Schema for adding money to a goal."""
    amount: float = Field(..., allow_inf_nan=False)
    enforce_cap: bool = False


class GoalProgress(BaseModel):
    """Derived progress figures of one goal."""
    percentage: float
    bar_percentage: float
    is_completed: bool
    remaining: float
    overshoot: float
    deadline_label: str


class GoalWithProgress(BaseModel):
    goal: Goal
    progress: GoalProgress


class GoalsSummary(BaseModel):
    """Totals over all goals."""
    goal_count: int
    active_count: int
    completed_count: int
    total_target: float
    total_saved: float
    overall_percentage: float
    goals: List[GoalWithProgress] = []
