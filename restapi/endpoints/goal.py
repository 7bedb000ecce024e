"""Goal endpoints for the API."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import RecordNotFoundError
from components.core.init_db import get_db
from components.goal.progress import add_money, goal_progress, goals_summary
from components.goal.repository import GoalRepository
from components.goal import schemas
from restapi.endpoints.helpers import merge_update

router = APIRouter(
    prefix="/goals",
    tags=["goals"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.GoalWithProgress])
async def read_goals(db: AsyncSession = Depends(get_db)):
    """Get all goals with their progress, nearest deadline first."""
    repo = GoalRepository(db)
    return [
        schemas.GoalWithProgress(goal=goal, progress=goal_progress(goal))
        for goal in await repo.get_all()
    ]


@router.get("/summary", response_model=schemas.GoalsSummary)
async def read_goals_summary(db: AsyncSession = Depends(get_db)):
    """Get total target, total saved and completed/active goal counts."""
    repo = GoalRepository(db)
    return goals_summary(await repo.get_all())


@router.get("/{goal_id}", response_model=schemas.GoalWithProgress)
async def read_goal(
    goal_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific goal by ID."""
    repo = GoalRepository(db)
    goal = await repo.get_by_id(goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return schemas.GoalWithProgress(goal=goal, progress=goal_progress(goal))


@router.post("/", response_model=schemas.Goal, status_code=201)
async def create_goal(
    goal: schemas.GoalCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new savings goal; the deadline must lie in the future."""
    repo = GoalRepository(db)
    return await repo.create(goal)


@router.put("/{goal_id}", response_model=schemas.Goal)
async def update_goal(
    goal_id: int,
    goal: schemas.GoalUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update the given fields of a goal.

    The merged goal is validated as a whole, so a goal whose deadline has
    passed must get a new future deadline before any other edit.
    """
    repo = GoalRepository(db)

    current = await repo.get_by_id(goal_id)
    if current is None:
        raise HTTPException(status_code=404, detail="Goal not found")

    merged = merge_update(current, goal, schemas.GoalCreate)

    updated = await repo.update(goal_id, schemas.GoalUpdate(**merged.model_dump()))
    if updated is None:
        raise RecordNotFoundError(f"Goal {goal_id} was deleted during the update")
    return updated


@router.post("/{goal_id}/add-money", response_model=schemas.GoalWithProgress)
async def add_money_to_goal(
    goal_id: int,
    request: schemas.AddMoneyRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Add money to a goal.

    The saved amount may go past the target unless ``enforce_cap`` is set,
    in which case an amount above the remaining one is rejected.
    """
    repo = GoalRepository(db)

    goal = await repo.get_by_id(goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")

    funded = add_money(goal, request.amount, enforce_cap=request.enforce_cap)
    saved = await repo.set_current_amount(goal_id, funded.current_amount)
    if saved is None:
        raise RecordNotFoundError(f"Goal {goal_id} was deleted during the update")
    return schemas.GoalWithProgress(goal=saved, progress=goal_progress(saved))


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a goal."""
    repo = GoalRepository(db)
    if not await repo.delete(goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"message": "Goal deleted successfully"}
