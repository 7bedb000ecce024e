"""Category endpoints for the API."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.core.schemas import TransactionType
from components.category.repository import CategoryRepository
from components.category import schemas

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.Category])
async def read_categories(
    type: Optional[TransactionType] = Query(None, description="Only categories of this type"),
    db: AsyncSession = Depends(get_db),
):
    """Get list of categories, used to fill selection lists."""
    repo = CategoryRepository(db)
    return await repo.get_all(type)


@router.post("/", response_model=schemas.Category, status_code=201)
async def create_category(
    category: schemas.CategoryCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new category."""
    repo = CategoryRepository(db)

    if await repo.get_by_name(category.name):
        raise HTTPException(
            status_code=400,
            detail="Category with this name already exists"
        )

    return await repo.create(category)
