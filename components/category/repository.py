"""Repository for category operations."""

from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from components.category.models import Category
from components.category import schemas
from components.core.logger import get_logger
from components.core.schemas import TransactionType

logger = get_logger(__name__)

DEFAULT_CATEGORIES = [
    ("Food & Dining", TransactionType.EXPENSE),
    ("Transportation", TransactionType.EXPENSE),
    ("Shopping", TransactionType.EXPENSE),
    ("Entertainment", TransactionType.EXPENSE),
    ("Bills & Utilities", TransactionType.EXPENSE),
    ("Healthcare", TransactionType.EXPENSE),
    ("Education", TransactionType.EXPENSE),
    ("Travel", TransactionType.EXPENSE),
    ("Salary", TransactionType.INCOME),
    ("Freelance", TransactionType.INCOME),
    ("Investments", TransactionType.INCOME),
    ("Other Income", TransactionType.INCOME),
]


class CategoryRepository:
    """Repository for category operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def get_all(self, category_type: Optional[TransactionType] = None) -> List[schemas.Category]:
        """Get all categories, optionally only those of one type."""
        query = select(Category).order_by(Category.id)
        if category_type is not None:
            query = query.where(Category.type == category_type.value)
        result = await self.session.execute(query)
        return [schemas.Category.model_validate(row) for row in result.scalars().all()]

    async def get_by_name(self, name: str) -> Optional[schemas.Category]:
        """Get category by its unique name."""
        result = await self.session.execute(
            select(Category).where(Category.name == name)
        )
        category = result.scalar_one_or_none()
        return schemas.Category.model_validate(category) if category else None

    async def create(self, category: schemas.CategoryCreate) -> schemas.Category:
        """Create a new category."""
        db_category = Category(name=category.name, type=category.type.value)
        self.session.add(db_category)
        await self.session.commit()
        await self.session.refresh(db_category)
        logger.info("Created category %r (%s)", db_category.name, db_category.type)
        return schemas.Category.model_validate(db_category)

    async def seed_defaults(self) -> int:
        """Insert the default category set when the table is empty."""
        result = await self.session.execute(select(func.count(Category.id)))
        if result.scalar():
            return 0
        for name, category_type in DEFAULT_CATEGORIES:
            self.session.add(Category(name=name, type=category_type.value))
        await self.session.commit()
        return len(DEFAULT_CATEGORIES)
