"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger("menuplanner.database")

# Create SQLAlchemy Base
Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine for the given URL; SQLite connections may cross threads."""
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    return create_engine(database_url, echo=echo, future=True, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to one engine"""
    return sessionmaker(bind=engine, autoflush=False, future=True)


def init_database(engine: Engine) -> None:
    """Initialize database schema"""
    # Import model modules so their tables are registered on Base.metadata
    from domain.models import menu, recipe, preference  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")
