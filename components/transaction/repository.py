"""Repository for transaction operations."""

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.logger import get_logger
from components.core.schemas import TransactionType
from components.transaction.models import Transaction
from components.transaction import schemas

logger = get_logger(__name__)


def month_bounds(month: str) -> tuple:
    """First day of ``month`` and first day of the following month."""
    year, month_number = (int(part) for part in month.split("-"))
    start = date(year, month_number, 1)
    end = date(year + 1, 1, 1) if month_number == 12 else date(year, month_number + 1, 1)
    return start, end


class TransactionRepository:
    """Repository for transaction operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_row(self, transaction_id: int) -> Optional[Transaction]:
        result = await self.session.execute(
            select(Transaction).where(Transaction.id == transaction_id)
        )
        return result.scalar_one_or_none()

    async def get_all(
        self,
        transaction_type: Optional[TransactionType] = None,
        month: Optional[str] = None,
    ) -> List[schemas.Transaction]:
        """Get all transactions, newest first, with optional type/month filtering."""
        query = select(Transaction)

        if transaction_type is not None:
            query = query.where(Transaction.type == transaction_type.value)
        if month:
            start, end = month_bounds(month)
            query = query.where(Transaction.date >= start, Transaction.date < end)

        query = query.order_by(Transaction.date.desc(), Transaction.id.desc())
        result = await self.session.execute(query)
        return [schemas.Transaction.model_validate(row) for row in result.scalars().all()]

    async def get_by_id(self, transaction_id: int) -> Optional[schemas.Transaction]:
        """Get transaction by ID."""
        db_transaction = await self._get_row(transaction_id)
        return schemas.Transaction.model_validate(db_transaction) if db_transaction else None

    async def create(self, transaction: schemas.TransactionCreate) -> schemas.Transaction:
        """Create a new transaction."""
        db_transaction = Transaction(
            type=transaction.type.value,
            amount=transaction.amount,
            category=transaction.category,
            description=transaction.description,
            date=transaction.date,
        )
        self.session.add(db_transaction)
        await self.session.commit()
        await self.session.refresh(db_transaction)
        logger.info(
            "Created %s transaction %d: %.2f in %r",
            db_transaction.type, db_transaction.id, db_transaction.amount, db_transaction.category,
        )
        return schemas.Transaction.model_validate(db_transaction)

    async def update(
        self, transaction_id: int, transaction: schemas.TransactionUpdate
    ) -> Optional[schemas.Transaction]:
        """Merge the fields present in ``transaction`` into the stored row."""
        db_transaction = await self._get_row(transaction_id)
        if not db_transaction:
            return None

        for field, value in transaction.model_dump(exclude_unset=True).items():
            if isinstance(value, TransactionType):
                value = value.value
            setattr(db_transaction, field, value)

        await self.session.commit()
        await self.session.refresh(db_transaction)
        logger.info("Updated transaction %d", transaction_id)
        return schemas.Transaction.model_validate(db_transaction)

    async def delete(self, transaction_id: int) -> bool:
        """Delete transaction by ID."""
        db_transaction = await self._get_row(transaction_id)
        if not db_transaction:
            return False

        await self.session.delete(db_transaction)
        await self.session.commit()
        logger.info("Deleted transaction %d", transaction_id)
        return True
