from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session

from acts.config import settings


def sqlite_pragmas(url: str) -> list[str]:
    """Pragmas run on every new SQLite connection. Empty for other backends.

    WAL needs a database file, so in-memory URLs only get foreign keys.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return []
    pragmas = ["PRAGMA foreign_keys=ON"]
    if parsed.database not in (None, "", ":memory:"):
        pragmas.insert(0, "PRAGMA journal_mode=WAL")
    return pragmas


def engine_options(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        return {"pool_pre_ping": True, "connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
    }


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))
_pragmas = sqlite_pragmas(settings.DATABASE_URL)

if _pragmas:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        for pragma in _pragmas:
            cursor.execute(pragma)
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the people, duty and log tables. Safe to call repeatedly."""
    from acts.models import Base  # noqa: F401, registers every model
    Base.metadata.create_all(bind=engine)
