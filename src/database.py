import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError, TimeoutError as SQLTimeoutError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from src.config import settings
from src.exceptions import BadRequest, StoreUnavailable

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Connection options bounding every store call by the configured timeout"""
    if url.startswith("sqlite"):
        # One shared in-process database across threads (test client, dev runs)
        return {
            "connect_args": {"check_same_thread": False, "timeout": settings.DB_TIMEOUT_SECONDS},
            "poolclass": StaticPool,
        }

    timeout_ms = settings.DB_TIMEOUT_SECONDS * 1000
    return {
        "connect_args": {
            "connect_timeout": settings.DB_TIMEOUT_SECONDS,
            "options": f"-c statement_timeout={timeout_ms}",
        },
        "pool_pre_ping": True,
        "pool_timeout": settings.DB_TIMEOUT_SECONDS,
    }


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session for one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(operation: str):
    """Translate driver failures and timeouts into StoreUnavailable"""
    try:
        yield
    except (OperationalError, SQLTimeoutError) as exc:
        logger.exception("Store operation '%s' failed", operation)
        raise StoreUnavailable(f"Data store unavailable during {operation}") from exc


def parse_id(raw_id: str) -> int:
    """Record id from a path parameter; malformed ids are a BadRequest"""
    try:
        record_id = int(raw_id)
    except (TypeError, ValueError):
        raise BadRequest("Invalid ID format")
    if record_id <= 0:
        raise BadRequest("Invalid ID format")
    return record_id
