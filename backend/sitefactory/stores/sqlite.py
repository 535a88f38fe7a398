# backend/sitefactory/stores/sqlite.py
from contextlib import contextmanager
from pathlib import Path
from typing import List

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import create_db_engine, create_session_factory
from ..errors import NotFoundError, StoreError
from ..models.project import Project as ProjectRow
from ..schemas.project import Project
from ..services.migrations import MigrationRunner
from ..utils.logging import db_logger
from .base import ProjectStore, next_timestamp, utc_now


class SqlProjectStore(ProjectStore):
    """Projects stored in the embedded SQLite database"""

    backend_name = "sqlite"

    def __init__(self, engine: Engine, migrations_path: Path):
        self.engine = engine
        self._session_factory = create_session_factory(engine)
        self.applied_migrations = MigrationRunner(engine, migrations_path).run()

    @classmethod
    def from_url(cls, database_url: str, migrations_path: Path) -> "SqlProjectStore":
        return cls(create_db_engine(database_url), migrations_path)

    @contextmanager
    def _session(self, action: str):
        session: Session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            db_logger.error(f"Database error while trying to {action}", extra={
                "error": str(e)
            }, exc_info=True)
            raise StoreError(f"Failed to {action}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _get_row(self, session: Session, project_id: int) -> ProjectRow:
        row = session.get(ProjectRow, project_id)
        if row is None:
            raise NotFoundError("Project not found")
        return row

    def list(self) -> List[Project]:
        with self._session("list projects") as session:
            rows = session.query(ProjectRow).order_by(ProjectRow.id.asc()).all()
            return [Project.model_validate(row) for row in rows]

    def _ensure_exists(self, project_id: int) -> None:
        with self._session("load project") as session:
            self._get_row(session, project_id)

    def _insert(self, name: str) -> Project:
        now = utc_now()
        with self._session("create project") as session:
            row = ProjectRow(name=name, created_at=now, updated_at=now)
            session.add(row)
            session.flush()
            project = Project.model_validate(row)
        db_logger.info("Project inserted", extra={"project_id": project.id})
        return project

    def _update(self, project_id: int, updates: dict) -> Project:
        with self._session("update project") as session:
            row = self._get_row(session, project_id)
            for field, value in updates.items():
                setattr(row, field, value)
            row.updated_at = next_timestamp(row.updated_at)
            session.flush()
            return Project.model_validate(row)

    def _remove(self, project_id: int) -> None:
        with self._session("delete project") as session:
            row = self._get_row(session, project_id)
            session.delete(row)

    def close(self) -> None:
        self.engine.dispose()
