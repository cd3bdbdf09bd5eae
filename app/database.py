from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_store_engine(database_url: str) -> Engine:
    """Build the engine backing a clinic store.

    An in-memory SQLite database lives inside a single connection, so the
    pool is pinned to that connection and shared across threads. The store's
    lock serialises access to it.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},  # SQLite-specific
            poolclass=StaticPool,
            echo=False,
        )
    return create_engine(database_url, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine):
    """Create all tables."""
    from app import models  # noqa: F401 - registers tables on Base.metadata
    Base.metadata.create_all(bind=engine)
