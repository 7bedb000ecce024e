"""Pydantic schemas for transaction data validation."""

from datetime import date as date_type, datetime
from typing import Optional

from pydantic import Field, computed_field, field_validator, model_validator

from components.core.schemas import RecordModel, TransactionType


def _not_blank(value: Optional[str], message: str) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


class TransactionBase(RecordModel):
    """Base transaction schema."""
    type: TransactionType
    amount: float = Field(..., allow_inf_nan=False)
    category: str
    description: str
    date: date_type

    @field_validator("category")
    @classmethod
    def category_required(cls, value: str) -> str:
        return _not_blank(value, "Please select a category")

    @field_validator("description")
    @classmethod
    def description_required(cls, value: str) -> str:
        return _not_blank(value, "Please enter a description")

    @model_validator(mode="after")
    def normalize_amount(self) -> "TransactionBase":
        # Expenses submitted with a negative sign are stored as magnitudes.
        if self.type == TransactionType.EXPENSE and self.amount < 0:
            self.amount = abs(self.amount)
        if self.amount <= 0:
            raise ValueError("Please enter a valid amount")
        return self


class TransactionCreate(TransactionBase):
    """Schema for transaction creation."""
    pass


class TransactionUpdate(RecordModel):
    """Schema for a partial transaction update; unset fields are left untouched."""
    type: Optional[TransactionType] = None
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[date_type] = None

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value == 0:
            raise ValueError("Please enter a valid amount")
        return value

    @field_validator("category")
    @classmethod
    def category_required(cls, value: Optional[str]) -> Optional[str]:
        return _not_blank(value, "Please select a category")

    @field_validator("description")
    @classmethod
    def description_required(cls, value: Optional[str]) -> Optional[str]:
        return _not_blank(value, "Please enter a description")


class Transaction(TransactionBase):
    """Schema for transaction response."""
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @computed_field
    @property
    def signed_amount(self) -> float:
        """Display value: expenses negative, income positive."""
        return -self.amount if self.type == TransactionType.EXPENSE else self.amount
