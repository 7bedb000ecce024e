from pydantic import Field, field_validator

from components.core.schemas import RecordModel, TransactionType


class CategoryBase(RecordModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: TransactionType

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter a category name")
        return value


class CategoryCreate(CategoryBase):
    """Schema for category creation."""
    pass


class Category(CategoryBase):
    id: int

    class Config:
        from_attributes = True
