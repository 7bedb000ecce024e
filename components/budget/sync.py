"""Keeps each budget's spent amount equal to the expenses of its partition.

A budget's partition is its (category, month) pair: ``spent`` must equal the
sum of the absolute amounts of all expense transactions in that category
whose date falls in that month. ``recompute_spent`` derives the value,
``sync_spent_amounts`` persists differences, and ``resync_for_transactions``
is the hook called after a transaction is created, edited or deleted.
"""

import math
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from components.budget import schemas
from components.budget.repository import BudgetRepository
from components.core.formatters import format_percentage, month_key_of
from components.core.logger import get_logger
from components.core.schemas import TransactionType
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import Transaction

logger = get_logger(__name__)

Partition = Tuple[str, str]


def recompute_spent(budget: schemas.Budget, transactions: Iterable[Transaction]) -> float:
    """Sum of expense magnitudes in the budget's category and month."""
    return math.fsum(
        abs(transaction.amount)
        for transaction in transactions
        if transaction.type == TransactionType.EXPENSE
        and transaction.category == budget.category
        and month_key_of(transaction.date) == budget.month
    )


async def sync_spent_amounts(
    repository: BudgetRepository,
    budgets: Sequence[schemas.Budget],
    transactions: Sequence[Transaction],
) -> List[schemas.Budget]:
    """
    Persist the recomputed spent amount of every budget that drifted.

    Returns the budgets with their in-memory ``spent`` brought up to date;
    the input budgets are left untouched. A budget the store no longer has
    is skipped.
    """
    synced = []
    for budget in budgets:
        total_spent = recompute_spent(budget, transactions)
        if total_spent == budget.spent:
            synced.append(budget)
            continue

        updated = await repository.update_spent_amount(budget.category, budget.month, total_spent)
        if updated is None:
            logger.warning("No budget stored for %r in %s; spent not updated", budget.category, budget.month)
            synced.append(budget)
            continue

        logger.info(
            "Budget %r %s spent %.2f -> %.2f", budget.category, budget.month, budget.spent, total_spent
        )
        synced.append(budget.model_copy(update={"spent": total_spent}))
    return synced


def affected_partitions(transactions: Iterable[Optional[Transaction]]) -> Set[Partition]:
    """(category, month) pairs touched by the given expense transactions."""
    return {
        (transaction.category, month_key_of(transaction.date))
        for transaction in transactions
        if transaction is not None and transaction.type == TransactionType.EXPENSE
    }


async def resync_for_transactions(
    budget_repository: BudgetRepository,
    transaction_repository: TransactionRepository,
    *transactions: Optional[Transaction],
) -> List[schemas.Budget]:
    """
    Recompute the budgets whose partition one of ``transactions`` belongs to.

    Pass both the old and new version of an edited transaction so the
    partition it moved out of is recomputed too. Income transactions never
    select a partition.
    """
    partitions = affected_partitions(transactions)
    if not partitions:
        return []

    budgets = [
        budget
        for budget in await budget_repository.get_all()
        if (budget.category, budget.month) in partitions
    ]
    if not budgets:
        return []

    snapshot = await transaction_repository.get_all(TransactionType.EXPENSE)
    return await sync_spent_amounts(budget_repository, budgets, snapshot)


def budget_status(budget: schemas.Budget, warning_threshold: float = 80.0) -> schemas.BudgetStatus:
    """Usage figures of one budget; a zero limit reports 0 % but is over once anything is spent."""
    percentage = budget.spent / budget.monthly_limit * 100 if budget.monthly_limit > 0 else 0.0
    is_over_budget = budget.spent > budget.monthly_limit
    if is_over_budget:
        level = "over"
    elif percentage > warning_threshold:
        level = "warning"
    else:
        level = "ok"
    return schemas.BudgetStatus(
        budget=budget,
        percentage=percentage,
        percentage_label=format_percentage(budget.spent, budget.monthly_limit),
        remaining=budget.monthly_limit - budget.spent,
        is_over_budget=is_over_budget,
        level=level,
    )


def budget_month_summary(budgets: Iterable[schemas.Budget], month: str) -> schemas.BudgetSummary:
    """Totals over the budgets of ``month``."""
    month_budgets = [budget for budget in budgets if budget.month == month]
    total_budget = sum(budget.monthly_limit for budget in month_budgets)
    total_spent = sum(budget.spent for budget in month_budgets)
    return schemas.BudgetSummary(
        month=month,
        budget_count=len(month_budgets),
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=total_budget - total_spent,
        percentage_used=total_spent / total_budget * 100 if total_budget > 0 else 0.0,
        is_over_budget=total_spent > total_budget,
    )
