"""Pure aggregations over transaction snapshots for the dashboard and charts."""

import math
from datetime import date
from typing import Dict, Iterable, List, Optional

from components.analytics import schemas
from components.core.formatters import format_month_label, get_current_month, month_key_of, shift_month
from components.core.schemas import TransactionType
from components.transaction.schemas import Transaction


def savings_rate(income: float, expenses: float) -> float:
    """Percentage of income kept after expenses; negative when overspending."""
    if income == 0:
        return 0.0
    return (income - expenses) / income * 100


def _income_total(transactions: Iterable[Transaction]) -> float:
    return math.fsum(t.amount for t in transactions if t.type == TransactionType.INCOME)


def _expense_total(transactions: Iterable[Transaction]) -> float:
    return math.fsum(abs(t.amount) for t in transactions if t.type == TransactionType.EXPENSE)


def transactions_in_month(transactions: Iterable[Transaction], month: str) -> List[Transaction]:
    return [t for t in transactions if month_key_of(t.date) == month]


def monthly_rollup(transactions: Iterable[Transaction], month: Optional[str] = None) -> schemas.MonthlyRollup:
    """Income, expenses, net income and savings rate of ``month`` (default: current month)."""
    month = month or get_current_month()
    month_transactions = transactions_in_month(transactions, month)
    total_income = _income_total(month_transactions)
    total_expenses = _expense_total(month_transactions)
    return schemas.MonthlyRollup(
        month=month,
        total_income=total_income,
        total_expenses=total_expenses,
        net_income=total_income - total_expenses,
        savings_rate=savings_rate(total_income, total_expenses),
        transaction_count=len(month_transactions),
    )


def category_breakdown(transactions: Iterable[Transaction], limit: int = 8) -> List[schemas.CategoryTotal]:
    """
    Expense totals per category, largest first, truncated to ``limit`` entries.

    Categories past the limit are dropped, not merged into an "Other" slice.
    Equal totals keep the order in which their categories first appeared.
    """
    totals: Dict[str, List[float]] = {}
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        totals.setdefault(transaction.category, []).append(abs(transaction.amount))

    ranked = sorted(
        ((category, math.fsum(amounts)) for category, amounts in totals.items()),
        key=lambda item: item[1],
        reverse=True,
    )[:limit]

    shown_total = math.fsum(total for _, total in ranked)
    return [
        schemas.CategoryTotal(
            category=category,
            total=total,
            percentage=total / shown_total * 100 if shown_total > 0 else 0.0,
        )
        for category, total in ranked
    ]


def trend_series(
    transactions: Iterable[Transaction], months: int = 6, today: Optional[date] = None
) -> schemas.TrendSeries:
    """
    Income and expense totals for the trailing ``months`` calendar months.

    The window ends with the month of ``today`` (inclusive) and is ordered
    oldest first. No transactions at all gives empty series.
    """
    transactions = list(transactions)
    if not transactions:
        return schemas.TrendSeries(month_keys=[], labels=[], income=[], expenses=[])

    current = get_current_month(today)
    month_keys = [shift_month(current, offset) for offset in range(-(months - 1), 1)]

    by_month: Dict[str, List[Transaction]] = {key: [] for key in month_keys}
    for transaction in transactions:
        key = month_key_of(transaction.date)
        if key in by_month:
            by_month[key].append(transaction)

    return schemas.TrendSeries(
        month_keys=month_keys,
        labels=[format_month_label(key) for key in month_keys],
        income=[_income_total(by_month[key]) for key in month_keys],
        expenses=[_expense_total(by_month[key]) for key in month_keys],
    )
