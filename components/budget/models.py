"""Budget model for the database."""

from sqlalchemy import Column, Integer, String, Numeric

from components.core.database import Base


class Budget(Base):
    """Budget model storing a monthly spending limit for one expense category."""
    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(100), nullable=False, index=True)
    monthly_limit = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    month = Column(String(7), nullable=False, index=True)  # YYYY-MM
    spent = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)  # Derived from transactions
