"""
Database engine, session factory and declarative base.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from fitcalc.config import settings

connect_args = {}
if settings.database_url.startswith("sqlite"):
    # FastAPI may run sync endpoints in a threadpool
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session for the duration of a request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables that do not exist yet."""
    # Import models to register with Base.metadata
    from fitcalc.models import preference  # noqa: F401

    Base.metadata.create_all(bind=engine)
