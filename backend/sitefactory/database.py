# backend/sitefactory/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .utils.logging import db_logger

Base = declarative_base()


def _configure_sqlite(engine: Engine, use_wal: bool) -> None:
    # pysqlite only opens transactions before DML on its own; hand BEGIN over
    # to SQLAlchemy so DDL inside a migration rolls back too
    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        if use_wal:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    @event.listens_for(engine, "begin")
    def on_begin(connection):
        connection.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str) -> Engine:
    """Create the engine for the embedded store"""
    db_logger.info(f"Connecting to database: {database_url}")
    is_sqlite = database_url.startswith("sqlite")

    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False} if is_sqlite else {},
        echo=False  # Set to True to log all SQL statements
    )
    if is_sqlite:
        _configure_sqlite(engine, use_wal=":memory:" not in database_url)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
