"""Goal model for the database."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric

from components.core.database import Base


class Goal(Base):
    """Goal model storing a savings target and the amount put aside so far."""
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    target_amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    current_amount = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    deadline = Column(Date, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
