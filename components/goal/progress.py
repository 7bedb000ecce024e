"""Goal progress figures and the add-money operation."""

from typing import Iterable

from components.core.exceptions import ValidationError
from components.core.formatters import format_date
from components.goal import schemas


def goal_progress(goal: schemas.Goal) -> schemas.GoalProgress:
    """
    Progress of ``goal`` towards its target.

    ``percentage`` is unclamped for text; ``bar_percentage`` is clamped to
    [0, 100] for progress bars. ``overshoot`` is how far past the target the
    goal went, zero until it is reached.
    """
    target = goal.target_amount
    current = goal.current_amount
    percentage = current / target * 100 if target > 0 else 0.0
    return schemas.GoalProgress(
        percentage=percentage,
        bar_percentage=min(max(percentage, 0.0), 100.0),
        is_completed=current >= target,
        remaining=max(target - current, 0.0),
        overshoot=max(current - target, 0.0),
        deadline_label=format_date(goal.deadline),
    )


def add_money(goal: schemas.Goal, increment: float, enforce_cap: bool = False) -> schemas.Goal:
    """
    Return a copy of ``goal`` with ``increment`` added to its saved amount.

    Raises:
        ValidationError: when the increment is not positive, or when
            ``enforce_cap`` is set and the increment exceeds what remains.
    """
    if not increment > 0:
        raise ValidationError("Please enter a valid amount")
    remaining = goal.target_amount - goal.current_amount
    if enforce_cap and increment > remaining:
        raise ValidationError(f"Amount exceeds the remaining {max(remaining, 0.0):.2f} for this goal")
    return goal.model_copy(update={"current_amount": goal.current_amount + increment})


def goals_summary(goals: Iterable[schemas.Goal]) -> schemas.GoalsSummary:
    """Totals over all goals, with each goal's progress attached."""
    goals = list(goals)
    total_target = sum(goal.target_amount for goal in goals)
    total_saved = sum(goal.current_amount for goal in goals)
    with_progress = [
        schemas.GoalWithProgress(goal=goal, progress=goal_progress(goal)) for goal in goals
    ]
    completed = sum(1 for item in with_progress if item.progress.is_completed)
    return schemas.GoalsSummary(
        goal_count=len(goals),
        active_count=len(goals) - completed,
        completed_count=completed,
        total_target=total_target,
        total_saved=total_saved,
        overall_percentage=total_saved / total_target * 100 if total_target > 0 else 0.0,
        goals=with_progress,
    )
