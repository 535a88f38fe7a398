# backend/sitefactory/models/project.py
from sqlalchemy import Column, Integer, String, DateTime

from ..database import Base


class Project(Base):
    __tablename__ = "projects"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
