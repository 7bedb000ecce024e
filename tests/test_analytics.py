from datetime import date

import pytest

from components.analytics.calculations import (
    category_breakdown,
    monthly_rollup,
    savings_rate,
    transactions_in_month,
    trend_series,
)
from components.core.schemas import TransactionType

from tests.factories import make_transaction


def income(id, amount, when=date(2024, 3, 1)):
    return make_transaction(id, amount, category="Salary", when=when, type=TransactionType.INCOME)


@pytest.mark.parametrize("income_total, expenses, expected", [
    (0, 0, 0),
    (0, 50, 0),
    (100, 40, 60),
    (100, 150, -50),
])
def test_savings_rate(income_total, expenses, expected):
    assert savings_rate(income_total, expenses) == pytest.approx(expected)


def test_monthly_rollup_totals():
    transactions = [
        income(1, 3000),
        make_transaction(2, 1200),
        make_transaction(3, 300, category="Travel"),
        make_transaction(4, 999, when=date(2024, 2, 28)),
    ]
    rollup = monthly_rollup(transactions, "2024-03")
    assert rollup.total_income == pytest.approx(3000)
    assert rollup.total_expenses == pytest.approx(1500)
    assert rollup.net_income == pytest.approx(1500)
    assert rollup.savings_rate == pytest.approx(50)
    assert rollup.transaction_count == 3


def test_monthly_rollup_of_empty_month():
    rollup = monthly_rollup([], "2024-03")
    assert rollup.total_income == 0
    assert rollup.total_expenses == 0
    assert rollup.savings_rate == 0


def test_transactions_in_month():
    transactions = [make_transaction(1, 10), make_transaction(2, 10, when=date(2024, 4, 1))]
    assert [t.id for t in transactions_in_month(transactions, "2024-04")] == [2]


def test_category_breakdown_sums_and_orders_descending():
    transactions = [
        make_transaction(1, 20, category="A"),
        make_transaction(2, 50, category="B"),
        make_transaction(3, 15, category="A"),
        income(4, 5000),
    ]
    result = category_breakdown(transactions)
    assert [(item.category, item.total) for item in result] == [("B", 50), ("A", 35)]
    assert sum(item.percentage for item in result) == pytest.approx(100)


def test_category_breakdown_ties_keep_first_seen_order():
    transactions = [make_transaction(1, 50, category="A"), make_transaction(2, 50, category="B")]
    assert [item.category for item in category_breakdown(transactions)] == ["A", "B"]


def test_category_breakdown_keeps_the_eight_largest():
    transactions = [make_transaction(i, float(i * 10), category=f"C{i}") for i in range(1, 11)]
    result = category_breakdown(transactions)
    assert len(result) == 8
    assert [item.category for item in result] == [f"C{i}" for i in range(10, 2, -1)]


def test_category_breakdown_of_nothing_is_empty():
    assert category_breakdown([]) == []
    assert category_breakdown([income(1, 100)]) == []


def test_trend_series_single_income_in_current_month():
    today = date(2024, 3, 15)
    series = trend_series([income(1, 100, when=today)], months=6, today=today)
    assert series.month_keys == ["2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03"]
    assert series.labels[0] == "Oct 2023"
    assert series.labels[-1] == "Mar 2024"
    assert series.income == [0, 0, 0, 0, 0, 100]
    assert series.expenses == [0] * 6


def test_trend_series_ignores_months_outside_the_window():
    today = date(2024, 3, 15)
    transactions = [make_transaction(1, 40, when=date(2023, 1, 5)), make_transaction(2, 25, when=date(2024, 2, 2))]
    series = trend_series(transactions, months=3, today=today)
    assert series.expenses == [0, 25, 0]


def test_trend_series_without_transactions_is_empty():
    series = trend_series([], months=6, today=date(2024, 3, 15))
    assert series.month_keys == []
    assert series.labels == []
    assert series.income == []
    assert series.expenses == []
