# backend/sitefactory/models/migration.py
from sqlalchemy import Column, Integer, String, DateTime

from ..database import Base


class Migration(Base):
    """Bookkeeping row for an applied migration file"""
    __tablename__ = "__migrations"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, unique=True)
    executed_at = Column(DateTime(timezone=True), nullable=False)
