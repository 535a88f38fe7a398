# backend/tests/stores/test_sqlite_store.py
import pytest
from sqlalchemy import inspect, text

from sitefactory.config import PACKAGE_PATH
from sitefactory.database import create_db_engine
from sitefactory.errors import MigrationError, NotFoundError, ValidationError
from sitefactory.services.migrations import MigrationRunner, split_statements
from sitefactory.stores import SqlProjectStore


def test_create_trims_name(store):
    project = store.create("  Alpha  ")

    assert project.name == "Alpha"
    assert project.id > 0
    assert project.created_at == project.updated_at


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_rejects_blank_name(store, name):
    with pytest.raises(ValidationError):
        store.create(name)
    assert store.list() == []


def test_list_is_ordered_by_id(store):
    created = [store.create(name).id for name in ("c", "a", "b")]
    assert [project.id for project in store.list()] == sorted(created)


def test_update(store):
    project = store.create("Alpha")

    updated = store.update(project.id, {"name": " Beta "})

    assert updated.name == "Beta"
    assert updated.created_at == project.created_at
    assert updated.updated_at > project.updated_at
    assert store.list()[0].name == "Beta"


def test_update_missing_project_wins_over_empty_changes(store):
    with pytest.raises(NotFoundError):
        store.update(9999, {})


def test_update_without_fields(store):
    project = store.create("Alpha")
    with pytest.raises(ValidationError):
        store.update(project.id, {"unknown": "value"})


def test_delete(store):
    project = store.create("Alpha")

    store.delete(project.id)

    assert store.list() == []
    with pytest.raises(NotFoundError):
        store.delete(project.id)


def test_ids_are_not_reused(store):
    first = store.create("first")
    second = store.create("second")
    store.delete(second.id)

    third = store.create("third")
    assert third.id > second.id > first.id


def test_bootstrap_creates_tables(store):
    tables = inspect(store.engine).get_table_names()
    assert "projects" in tables
    assert "__migrations" in tables


def test_migrations_run_once_in_filename_order(tmp_path, migrations_dir):
    (migrations_dir / "002_seed.sql").write_text(
        "INSERT INTO audit (note) VALUES ('second');\n"
    )
    (migrations_dir / "001_audit.sql").write_text(
        "-- audit trail\n"
        "CREATE TABLE audit (id INTEGER PRIMARY KEY, note TEXT NOT NULL);\n"
        "INSERT INTO audit (note) VALUES ('first; with a semicolon');\n"
    )
    (migrations_dir / "README.txt").write_text("not a migration")
    url = f"sqlite:///{tmp_path / 'migrated.db'}"

    first = SqlProjectStore.from_url(url, migrations_dir)
    assert first.applied_migrations == ["001_audit.sql", "002_seed.sql"]
    first.close()

    second = SqlProjectStore.from_url(url, migrations_dir)
    assert second.applied_migrations == []
    with second.engine.connect() as connection:
        notes = connection.execute(text("SELECT note FROM audit ORDER BY id")).scalars().all()
    assert notes == ["first; with a semicolon", "second"]
    second.close()


def test_failed_migration_is_rolled_back(tmp_path, migrations_dir):
    (migrations_dir / "001_broken.sql").write_text(
        "CREATE TABLE half_done (id INTEGER PRIMARY KEY);\n"
        "INSERT INTO missing_table VALUES (1);\n"
    )
    url = f"sqlite:///{tmp_path / 'broken.db'}"

    with pytest.raises(MigrationError) as excinfo:
        SqlProjectStore.from_url(url, migrations_dir)
    assert excinfo.value.name == "001_broken.sql"

    engine = create_db_engine(url)
    assert "half_done" not in inspect(engine).get_table_names()
    assert MigrationRunner(engine, migrations_dir).applied() == set()
    engine.dispose()


def test_shipped_migrations_apply(tmp_path):
    store = SqlProjectStore.from_url(f"sqlite:///{tmp_path / 'shipped.db'}", PACKAGE_PATH / "migrations")
    assert store.applied_migrations == sorted(store.applied_migrations)
    assert len(store.applied_migrations) >= 1
    store.close()


def test_split_statements():
    script = "CREATE TABLE a (x TEXT);\n\nINSERT INTO a VALUES ('1;2');\n;\n"
    assert list(split_statements(script)) == [
        "CREATE TABLE a (x TEXT);",
        "INSERT INTO a VALUES ('1;2');",
    ]
