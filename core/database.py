from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from core.config import DATABASE_URL

# Base class for all models
Base = declarative_base()


def make_engine(url: str = DATABASE_URL):
    """Create an engine; in-memory SQLite shares one connection across reruns."""
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, connect_args={"check_same_thread": False})


# Create engine
engine = make_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Create all tables. Models must be imported first so they register on Base."""
    import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def get_db_context():
    """
    Context manager for database sessions.
    Automatically closes session when done.

    Usage:
        with get_db_context() as db:
            patients = list_patients(db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
