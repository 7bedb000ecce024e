"""Script to seed demo data into the database."""

import asyncio
from datetime import date, timedelta

from sqlalchemy import delete

from components.budget.models import Budget
from components.budget.repository import BudgetRepository
from components.budget.schemas import BudgetCreate
from components.budget.sync import sync_spent_amounts
from components.core.config import get_settings
from components.core.database import DatabaseManager
from components.core.formatters import format_currency, get_current_month, shift_month
from components.core.init_db import prepare_database
from components.core.logger import configure_logging, get_logger
from components.core.schemas import TransactionType
from components.goal.models import Goal
from components.goal.repository import GoalRepository
from components.goal.schemas import GoalCreate
from components.transaction.models import Transaction
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import TransactionCreate

logger = get_logger(__name__)

MONTHS = 3

# (category, description, amount, day of month)
MONTHLY_EXPENSES = [
    ("Food & Dining", "Groceries", 185.40, 3),
    ("Food & Dining", "Dinner out", 62.75, 14),
    ("Transportation", "Monthly transit pass", 95.00, 1),
    ("Bills & Utilities", "Electricity bill", 120.30, 8),
    ("Entertainment", "Concert tickets", 80.00, 20),
    ("Shopping", "New shoes", 110.00, 17),
]

MONTHLY_INCOME = [
    ("Salary", "Monthly salary", 4200.00, 1),
    ("Freelance", "Website project", 650.00, 12),
]

BUDGET_LIMITS = {
    "Food & Dining": 300.00,
    "Transportation": 120.00,
    "Bills & Utilities": 150.00,
    "Entertainment": 60.00,
}


def _day_in_month(month: str, day: int) -> date:
    year, month_number = (int(part) for part in month.split("-"))
    return date(year, month_number, day)


async def seed_data():
    """Seed demo transactions, budgets and goals over the trailing months."""
    settings = get_settings()
    configure_logging(settings)
    db_manager = DatabaseManager(settings=settings)
    await prepare_database(db_manager, settings)

    async with db_manager.get_db() as db:
        # Clear existing data
        await db.execute(delete(Transaction))
        await db.execute(delete(Budget))
        await db.execute(delete(Goal))
        await db.commit()

        transaction_repo = TransactionRepository(db)
        budget_repo = BudgetRepository(db)
        goal_repo = GoalRepository(db)

        current_month = get_current_month()
        months = [shift_month(current_month, offset) for offset in range(-(MONTHS - 1), 1)]
        today = date.today()

        for month in months:
            entries = [(TransactionType.INCOME, *entry) for entry in MONTHLY_INCOME]
            entries += [(TransactionType.EXPENSE, *entry) for entry in MONTHLY_EXPENSES]
            for transaction_type, category, description, amount, day in entries:
                when = _day_in_month(month, day)
                if when > today:
                    continue
                await transaction_repo.create(TransactionCreate(
                    type=transaction_type,
                    amount=amount,
                    category=category,
                    description=description,
                    date=when,
                ))

            for category, limit in BUDGET_LIMITS.items():
                await budget_repo.create(BudgetCreate(category=category, monthly_limit=limit, month=month))

        goals = [
            GoalCreate(name="Emergency fund", target_amount=10000.00, current_amount=3500.00,
                       deadline=today + timedelta(days=365)),
            GoalCreate(name="Summer vacation", target_amount=2500.00, current_amount=900.00,
                       deadline=today + timedelta(days=180)),
            GoalCreate(name="New laptop", target_amount=1500.00, current_amount=1500.00,
                       deadline=today + timedelta(days=90)),
        ]
        for goal in goals:
            await goal_repo.create(goal)

        transactions = await transaction_repo.get_all(TransactionType.EXPENSE)
        budgets = await sync_spent_amounts(budget_repo, await budget_repo.get_all(), transactions)
        for budget in budgets:
            logger.info(
                "%s %s: %s of %s spent",
                budget.month,
                budget.category,
                format_currency(budget.spent, settings.CURRENCY_SYMBOL),
                format_currency(budget.monthly_limit, settings.CURRENCY_SYMBOL),
            )

    await db_manager.dispose()

if __name__ == "__main__":
    asyncio.run(seed_data())
