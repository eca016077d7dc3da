"""
Database configuration and session management.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Sessions are used from FastAPI's worker threads.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


# Create SQLAlchemy engine
engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url)
)

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def create_tables() -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on Base.metadata
    from app.infrastructure.db import models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    from app.infrastructure.db import models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
