"""
Database engine and session factory.
The engine is built from CHORE_WALLET_DATABASE_URL; the default SQLite file
gets its data directory created on first import.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from chore_wallet.config import DATA_DIR, DATABASE_URL, DB_PATH


class Base(DeclarativeBase):
    pass


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """SQLite ignores ON DELETE SET NULL unless foreign keys are switched on per connection."""

    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # Endpoints run in FastAPI's thread pool
    connect_args["check_same_thread"] = False
    if DATABASE_URL.endswith(str(DB_PATH)):
        DATA_DIR.mkdir(parents=True, exist_ok=True)

engine = create_engine(DATABASE_URL, connect_args=connect_args)
if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
