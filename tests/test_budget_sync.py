from datetime import date

import pytest

from components.budget.repository import BudgetRepository
from components.budget.schemas import BudgetCreate
from components.budget.sync import (
    affected_partitions,
    budget_month_summary,
    budget_status,
    recompute_spent,
    resync_for_transactions,
    sync_spent_amounts,
)
from components.core.schemas import TransactionType
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import TransactionCreate, TransactionUpdate

from tests.factories import make_budget, make_transaction


def sample_transactions():
    return [
        make_transaction(1, 120.0),
        make_transaction(2, 30.5, when=date(2024, 3, 31)),
        make_transaction(3, 99.0, when=date(2024, 4, 1)),
        make_transaction(4, 45.0, category="Travel"),
        make_transaction(5, 1000.0, category="Food & Dining", type=TransactionType.INCOME),
    ]


def test_recompute_spent_filters_by_category_month_and_type():
    assert recompute_spent(make_budget(), sample_transactions()) == pytest.approx(150.5)


def test_recompute_spent_is_order_independent_and_idempotent():
    budget = make_budget()
    transactions = sample_transactions()
    first = recompute_spent(budget, transactions)
    assert recompute_spent(budget, list(reversed(transactions))) == first
    assert recompute_spent(budget, transactions) == first


def test_recompute_spent_uses_magnitude_of_signed_rows():
    legacy = make_transaction(1, 20.0).model_copy(update={"amount": -20.0})
    assert recompute_spent(make_budget(), [legacy, make_transaction(2, 5.0)]) == pytest.approx(25.0)


def test_recompute_spent_without_matches_is_zero():
    assert recompute_spent(make_budget(month="2023-01"), sample_transactions()) == 0


def test_affected_partitions_ignore_income_and_none():
    partitions = affected_partitions([
        make_transaction(1, 10.0),
        make_transaction(2, 10.0, category="Salary", type=TransactionType.INCOME),
        None,
    ])
    assert partitions == {("Food & Dining", "2024-03")}


def test_budget_status_levels():
    assert budget_status(make_budget(monthly_limit=100, spent=50)).level == "ok"
    assert budget_status(make_budget(monthly_limit=100, spent=85)).level == "warning"
    assert budget_status(make_budget(monthly_limit=200, spent=50)).percentage_label == "25.0%"
    over = budget_status(make_budget(monthly_limit=100, spent=130))
    assert over.level == "over"
    assert over.is_over_budget
    assert over.remaining == pytest.approx(-30)


def test_zero_limit_budget_is_over_with_zero_percentage():
    status = budget_status(make_budget(monthly_limit=0, spent=10))
    assert status.percentage == 0
    assert status.percentage_label == "0%"
    assert status.is_over_budget


def test_budget_month_summary_only_counts_that_month():
    budgets = [
        make_budget(1, monthly_limit=200, spent=50),
        make_budget(2, category="Travel", monthly_limit=300, spent=100),
        make_budget(3, month="2024-04", monthly_limit=1000, spent=999),
    ]
    summary = budget_month_summary(budgets, "2024-03")
    assert summary.budget_count == 2
    assert summary.total_budget == pytest.approx(500)
    assert summary.total_spent == pytest.approx(150)
    assert summary.remaining == pytest.approx(350)
    assert summary.percentage_used == pytest.approx(30)
    assert not summary.is_over_budget


async def test_sync_persists_only_drifted_budgets(session):
    repo = BudgetRepository(session)
    food = await repo.create(BudgetCreate(category="Food & Dining", monthly_limit=500, month="2024-03"))
    travel = await repo.create(BudgetCreate(category="Travel", monthly_limit=100, month="2024-05"))

    synced = await sync_spent_amounts(repo, [food, travel], sample_transactions())

    assert [budget.spent for budget in synced] == pytest.approx([150.5, 0])
    assert food.spent == 0
    stored = await repo.get_by_id(food.id)
    assert stored.spent == pytest.approx(150.5)


async def test_sync_skips_budget_missing_from_store(session):
    repo = BudgetRepository(session)
    ghost = make_budget(id=999)

    synced = await sync_spent_amounts(repo, [ghost], sample_transactions())

    assert synced == [ghost]


async def test_sync_with_no_budgets_is_a_noop(session):
    assert await sync_spent_amounts(BudgetRepository(session), [], sample_transactions()) == []


async def test_moving_an_expense_resyncs_the_partition_it_left(session):
    budget_repo = BudgetRepository(session)
    transaction_repo = TransactionRepository(session)
    food = await budget_repo.create(BudgetCreate(category="Food & Dining", monthly_limit=500, month="2024-03"))

    created = await transaction_repo.create(TransactionCreate(
        type="expense", amount=80, category="Food & Dining", description="Lunch", date=date(2024, 3, 5)
    ))
    await resync_for_transactions(budget_repo, transaction_repo, created)
    assert (await budget_repo.get_by_id(food.id)).spent == pytest.approx(80)

    moved = created.model_copy(update={"category": "Travel"})
    await transaction_repo.update(created.id, TransactionUpdate(category="Travel"))
    await resync_for_transactions(budget_repo, transaction_repo, created, moved)
    assert (await budget_repo.get_by_id(food.id)).spent == 0