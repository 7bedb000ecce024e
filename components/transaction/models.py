"""Transaction model for the database."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric

from components.core.database import Base


class Transaction(Base):
    """Transaction model storing a single income or expense entry."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False, index=True)  # income | expense
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)  # Positive magnitude
    category = Column(String(100), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
