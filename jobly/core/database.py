from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from jobly.core.config import settings
from jobly.core.logging_config import get_logger

logger = get_logger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
    }


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores REFERENCES clauses unless every connection opts in."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create the companies and jobs tables if they do not exist yet.

    Args:
        bind: Engine to create the schema on (defaults to the configured engine)
    """
    from jobly.models import company, job  # noqa: F401  Import models to register them

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Database schema ready on {target.url.render_as_string(hide_password=True)}")


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Commit the session when the block succeeds, roll it back on any error.

    The error is re-raised unchanged.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
