"""Repository for goal operations."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.logger import get_logger
from components.goal.models import Goal
from components.goal import schemas

logger = get_logger(__name__)


class GoalRepository:
    """Repository for goal operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_row(self, goal_id: int) -> Optional[Goal]:
        result = await self.session.execute(
            select(Goal).where(Goal.id == goal_id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> List[schemas.Goal]:
        """Get all goals, nearest deadline first."""
        result = await self.session.execute(
            select(Goal).order_by(Goal.deadline, Goal.id)
        )
        return [schemas.Goal.model_validate(row) for row in result.scalars().all()]

    async def get_by_id(self, goal_id: int) -> Optional[schemas.Goal]:
        """Get goal by ID."""
        db_goal = await self._get_row(goal_id)
        return schemas.Goal.model_validate(db_goal) if db_goal else None

    async def create(self, goal: schemas.GoalCreate) -> schemas.Goal:
        """Create a new goal."""
        db_goal = Goal(
            name=goal.name,
            target_amount=goal.target_amount,
            current_amount=goal.current_amount,
            deadline=goal.deadline,
        )
        self.session.add(db_goal)
        await self.session.commit()
        await self.session.refresh(db_goal)
        logger.info("Created goal %d %r", db_goal.id, db_goal.name)
        return schemas.Goal.model_validate(db_goal)

    async def update(self, goal_id: int, goal: schemas.GoalUpdate) -> Optional[schemas.Goal]:
        """Merge the fields present in ``goal`` into the stored row."""
        db_goal = await self._get_row(goal_id)
        if not db_goal:
            return None

        for field, value in goal.model_dump(exclude_unset=True).items():
            setattr(db_goal, field, value)

        await self.session.commit()
        await self.session.refresh(db_goal)
        logger.info("Updated goal %d", goal_id)
        return schemas.Goal.model_validate(db_goal)

    async def set_current_amount(self, goal_id: int, amount: float) -> Optional[schemas.Goal]:
        """Replace the saved amount of a goal; not an atomic increment."""
        db_goal = await self._get_row(goal_id)
        if not db_goal:
            return None

        db_goal.current_amount = amount
        await self.session.commit()
        await self.session.refresh(db_goal)
        logger.info("Goal %d saved amount set to %.2f", goal_id, amount)
        return schemas.Goal.model_validate(db_goal)

    async def delete(self, goal_id: int) -> bool:
        """Delete goal by ID."""
        db_goal = await self._get_row(goal_id)
        if not db_goal:
            return False

        await self.session.delete(db_goal)
        await self.session.commit()
        logger.info("Deleted goal %d", goal_id)
        return True
