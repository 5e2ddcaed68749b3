from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, DateTime
from datetime import datetime

Base = declarative_base()


class TimestampMixin:
    """Mixin for the creation timestamp column"""
    __abstract__ = True
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

__all__ = ["Base", "TimestampMixin"]
