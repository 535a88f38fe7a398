# backend/sitefactory/models/__init__.py
from ..database import Base
from .project import Project
from .migration import Migration

__all__ = [
    "Base",
    "Project",
    "Migration"
]
