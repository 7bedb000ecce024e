"""Helpers shared by the resource endpoints."""

from typing import Any, Dict, Type, TypeVar

import pydantic
from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from components.category.repository import CategoryRepository
from components.core.exceptions import ValidationError
from components.core.schemas import TransactionType

Model = TypeVar("Model", bound=BaseModel)


async def require_category(repo: CategoryRepository, name: str, category_type: TransactionType) -> None:
    """Reject category names that are unknown or belong to the other type."""
    category = await repo.get_by_name(name)
    if category is None:
        raise ValidationError(f"Unknown category: {name!r}")
    if category.type != category_type:
        raise ValidationError(f"Category {name!r} is not an {category_type.value} category")


def merge_update(current: BaseModel, changes: BaseModel, schema: Type[Model]) -> Model:
    """
    Apply a partial update to ``current`` and validate the merged record.

    Raises a 422 HTTPException when the merged record is invalid, e.g. an
    amount change that does not fit the stored transaction type.
    """
    merged: Dict[str, Any] = {**current.model_dump(), **changes.model_dump(exclude_unset=True)}
    try:
        return schema.model_validate(merged)
    except pydantic.ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=jsonable_encoder(e.errors(include_url=False, include_context=False)),
        )
