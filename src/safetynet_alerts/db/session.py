"""
session.py
-----------
Creates the database engine and session factory for SQLAlchemy.
This connects to PostgreSQL using the connection string from config (.env).
"""

from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from safetynet_alerts.config import DATABASE_URL, SQL_ECHO

# SQLAlchemy engine: manages the connection pool
engine = create_engine(DATABASE_URL, echo=SQL_ECHO, pool_pre_ping=True, future=True)

# Session factory: a new DB session per unit of work
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

# Base class for ORM models to inherit from (like Person)
Base = declarative_base()


@contextmanager
def session_scope(session_factory=None):
    """
    One unit of work: commits when the block succeeds, rolls back and
    re-raises on any exception, and always closes the session.

    Usage:
        with session_scope() as session:
            create_person(session, body)
    """
    session = (session_factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_tables(bind=None):
    """Create all tables if not present."""
    # models must be imported so their tables are registered on Base.metadata
    from safetynet_alerts.db import models  # noqa: F401

    Base.metadata.create_all(bind or engine)
