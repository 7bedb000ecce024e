"""Category model for the database."""

from sqlalchemy import Column, Integer, String

from components.core.database import Base


class Category(Base):
    """Category model for classifying income and expense transactions."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    type = Column(String(20), nullable=False)  # income | expense
