# backend/sitefactory/services/migrations.py
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from ..errors import MigrationError
from ..models import Base, Migration
from ..utils.logging import db_logger


def split_statements(script: str) -> Iterator[str]:
    """Yield the complete SQL statements of a migration script in order"""
    buffer = ""
    for line in script.splitlines(keepends=True):
        buffer += line
        if sqlite3.complete_statement(buffer):
            statement = buffer.strip()
            buffer = ""
            if statement.rstrip(";").strip():
                yield statement
    if buffer.strip():
        yield buffer.strip()


class MigrationRunner:
    """Bootstraps the schema and applies pending ``*.sql`` migration files.

    Files are applied in lexicographic filename order, each one inside its
    own transaction together with its ``__migrations`` bookkeeping row, so a
    file either fully applies exactly once or leaves no trace.
    """

    def __init__(self, engine: Engine, migrations_path: Path):
        self.engine = engine
        self.migrations_path = Path(migrations_path)

    def bootstrap(self) -> None:
        """Create the projects and __migrations tables if they don't exist"""
        Base.metadata.create_all(bind=self.engine)

    def applied(self) -> set:
        with self.engine.connect() as connection:
            return set(connection.execute(select(Migration.name)).scalars())

    def pending(self) -> List[Path]:
        if not self.migrations_path.is_dir():
            db_logger.warning("Migrations directory not found", extra={
                "path": str(self.migrations_path)
            })
            return []
        done = self.applied()
        return [
            path for path in sorted(self.migrations_path.glob("*.sql"), key=lambda p: p.name)
            if path.name not in done
        ]

    def apply(self, path: Path) -> None:
        script = path.read_text(encoding="utf-8")
        try:
            with self.engine.begin() as connection:
                for statement in split_statements(script):
                    connection.exec_driver_sql(statement)
                connection.execute(
                    insert(Migration).values(name=path.name, executed_at=datetime.now(timezone.utc))
                )
        except Exception as e:
            db_logger.error(f"Migration {path.name} failed and was rolled back", extra={
                "migration": path.name,
                "error": str(e)
            })
            raise MigrationError(path.name, e) from e

        db_logger.info(f"Applied migration {path.name}")

    def run(self) -> List[str]:
        """Bootstrap and apply every pending migration, returning their names"""
        self.bootstrap()
        applied = []
        for path in self.pending():
            self.apply(path)
            applied.append(path.name)

        if applied:
            db_logger.info(f"Executed {len(applied)} migration(s)", extra={"migrations": applied})
        return applied
