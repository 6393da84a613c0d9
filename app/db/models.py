"""
SQLAlchemy ORM models.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Integer,
    BigInteger,
    DateTime,
    JSON,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class SavedDealRecord(Base):
    """A named calculator run saved by the user."""

    __tablename__ = "saved_deals"

    # Millisecond timestamp at save time, unique within the list
    id = Column(BigInteger, primary_key=True, autoincrement=False)
    position = Column(Integer, nullable=False, default=0)  # 0 = newest

    name = Column(String(255), nullable=False)
    calculator_type = Column(String(50), nullable=False)
    industry = Column(String(50), nullable=False)
    country = Column(String(10), nullable=False)
    saved_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Raw form values and a one-line result summary
    data = Column(JSON, nullable=False, default=dict)
    result = Column(Text, nullable=False, default="")
