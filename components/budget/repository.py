"""Repository for budget operations."""

import csv
from typing import BinaryIO, Dict, List, Optional, Set, Tuple

import pandas as pd
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.models import Budget
from components.budget import schemas
from components.category.repository import CategoryRepository
from components.core.logger import get_logger
from components.core.schemas import TransactionType, canonical_key

logger = get_logger(__name__)

CSV_COLUMNS = ("month", "category", "monthly_limit")


class BudgetRepository:
    """Repository for budget operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_row(self, budget_id: int) -> Optional[Budget]:
        result = await self.session.execute(
            select(Budget).where(Budget.id == budget_id)
        )
        return result.scalar_one_or_none()

    async def get_all(self, month: Optional[str] = None) -> List[schemas.Budget]:
        """Get all budgets, optionally only those of one month."""
        query = select(Budget).order_by(Budget.month, Budget.id)
        if month:
            query = query.where(Budget.month == month)
        result = await self.session.execute(query)
        return [schemas.Budget.model_validate(row) for row in result.scalars().all()]

    async def get_by_id(self, budget_id: int) -> Optional[schemas.Budget]:
        """Get budget by ID."""
        db_budget = await self._get_row(budget_id)
        return schemas.Budget.model_validate(db_budget) if db_budget else None

    async def get_by_category_and_month(self, category: str, month: str) -> Optional[schemas.Budget]:
        """Get the budget of one (category, month) partition."""
        result = await self.session.execute(
            select(Budget)
            .where(Budget.category == category, Budget.month == month)
            .order_by(Budget.id)
        )
        db_budget = result.scalars().first()
        return schemas.Budget.model_validate(db_budget) if db_budget else None

    async def create(self, budget: schemas.BudgetCreate) -> schemas.Budget:
        """Create a new budget with nothing spent yet."""
        db_budget = Budget(
            category=budget.category,
            monthly_limit=budget.monthly_limit,
            month=budget.month,
            spent=0,
        )
        self.session.add(db_budget)
        await self.session.commit()
        await self.session.refresh(db_budget)
        logger.info("Created budget %d for %r in %s", db_budget.id, db_budget.category, db_budget.month)
        return schemas.Budget.model_validate(db_budget)

    async def update(self, budget_id: int, budget: schemas.BudgetUpdate) -> Optional[schemas.Budget]:
        """Merge the fields present in ``budget`` into the stored row."""
        db_budget = await self._get_row(budget_id)
        if not db_budget:
            return None

        for field, value in budget.model_dump(exclude_unset=True).items():
            setattr(db_budget, field, value)

        await self.session.commit()
        await self.session.refresh(db_budget)
        logger.info("Updated budget %d", budget_id)
        return schemas.Budget.model_validate(db_budget)

    async def delete(self, budget_id: int) -> bool:
        """Delete budget by ID."""
        db_budget = await self._get_row(budget_id)
        if not db_budget:
            return False

        await self.session.delete(db_budget)
        await self.session.commit()
        logger.info("Deleted budget %d", budget_id)
        return True

    async def update_spent_amount(self, category: str, month: str, amount: float) -> Optional[schemas.Budget]:
        """
        Overwrite the spent amount of the budget for (category, month).

        Returns the updated budget, or None when no budget exists for the pair.
        """
        result = await self.session.execute(
            select(Budget)
            .where(Budget.category == category, Budget.month == month)
            .order_by(Budget.id)
        )
        db_budget = result.scalars().first()
        if not db_budget:
            return None

        db_budget.spent = amount
        await self.session.commit()
        await self.session.refresh(db_budget)
        return schemas.Budget.model_validate(db_budget)

    async def upload_budgets_from_csv(self, file_content: BinaryIO) -> Tuple[bool, str, List[Dict]]:
        """
        Upload budgets from a CSV file.

        Args:
            file_content: The CSV file content (comma or tab separated)

        Returns:
            Tuple containing:
            - Success status (bool)
            - Message (str)
            - List of errors if any (List[Dict])
        """
        errors = []

        try:
            frame = pd.read_csv(file_content, sep=None, engine="python", dtype=str, keep_default_na=False)
        except (csv.Error, ValueError) as e:  # pandas parser errors are ValueErrors
            return False, f"Error processing file: {str(e)}", []

        frame.columns = [canonical_key(str(column).strip()) for column in frame.columns]
        if not all(column in frame.columns for column in CSV_COLUMNS):
            return False, "CSV file must contain 'month', 'category', and 'monthly_limit' columns", []

        frame["limit_value"] = pd.to_numeric(frame["monthly_limit"].str.strip(), errors="coerce")

        categories = await CategoryRepository(self.session).get_all(TransactionType.EXPENSE)
        expense_categories = {category.name for category in categories}

        seen: Set[Tuple[str, str]] = set()
        new_budgets = []

        # Start at 2 to account for header row
        for row_num, row in enumerate(frame.to_dict("records"), start=2):
            month = row["month"].strip()
            category = row["category"].strip()

            try:
                schemas.validate_month_key(month)
            except ValueError:
                errors.append({
                    "row": row_num,
                    "message": f"Invalid month: {row['month']!r}. Expected YYYY-MM"
                })
                continue

            limit = row["limit_value"]
            if pd.isna(limit) or limit <= 0:
                errors.append({
                    "row": row_num,
                    "message": f"Invalid monthly_limit value: {row['monthly_limit']!r}"
                })
                continue

            if category not in expense_categories:
                errors.append({
                    "row": row_num,
                    "message": f"Category {category!r} is not a known expense category"
                })
                continue

            if (category, month) in seen:
                errors.append({
                    "row": row_num,
                    "message": f"Duplicate budget for {category!r} in {month} within the file"
                })
                continue
            seen.add((category, month))

            if await self.get_by_category_and_month(category, month):
                errors.append({
                    "row": row_num,
                    "message": f"Budget already exists for {category!r} in {month}"
                })
                continue

            new_budgets.append(Budget(category=category, monthly_limit=float(limit), month=month, spent=0))

        # If we have any errors, return them without committing
        if errors:
            return False, "Validation errors occurred", errors

        self.session.add_all(new_budgets)
        await self.session.commit()
        logger.info("Uploaded %d budgets from CSV", len(new_budgets))
        return True, f"{len(new_budgets)} budgets uploaded successfully", []
