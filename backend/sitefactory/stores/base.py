# backend/sitefactory/stores/base.py
import abc
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..errors import ValidationError
from ..schemas.project import Project

UPDATABLE_FIELDS = ("name",)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current UTC time, nudged forward so it is strictly after ``previous``"""
    now = utc_now()
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def normalize_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("name required")
    return name.strip()


class ProjectStore(abc.ABC):
    """Storage contract for the projects table.

    Subclasses implement the backend-specific ``_insert``/``_update``/``_remove``
    steps; input checks shared by every backend live here.
    """

    backend_name = "abstract"

    @abc.abstractmethod
    def list(self) -> List[Project]:
        """All projects ordered by id ascending"""

    def create(self, name: str) -> Project:
        return self._insert(normalize_name(name))

    def update(self, project_id: int, changes: dict) -> Project:
        """Apply ``changes`` to an existing project.

        Raises NotFoundError before looking at ``changes``, so a missing
        project is reported whatever the payload.
        """
        self._ensure_exists(project_id)
        updates = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS and value is not None}
        if not updates:
            raise ValidationError("invalid payload")
        if "name" in updates:
            updates["name"] = normalize_name(updates["name"])
        return self._update(project_id, updates)

    def delete(self, project_id: int) -> None:
        self._remove(project_id)

    def close(self) -> None:
        """Release the backend handle"""

    @abc.abstractmethod
    def _ensure_exists(self, project_id: int) -> None:
        pass

    @abc.abstractmethod
    def _insert(self, name: str) -> Project:
        pass

    @abc.abstractmethod
    def _update(self, project_id: int, updates: dict) -> Project:
        pass

    @abc.abstractmethod
    def _remove(self, project_id: int) -> None:
        pass
