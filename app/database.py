"""
Database connection and session management.
"""
from __future__ import annotations

import logging
from typing import Any, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.config import Settings, settings

logger = logging.getLogger(__name__)


def build_engine(config: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.
    """
    url = config.database_url
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_recycle=config.db_pool_recycle,
        echo=False,
    )


engine: Engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting a database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Initialize database by registering models and creating tables.
    """
    from app.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")


def database_health() -> dict[str, Any]:
    """
    Return structured database health details.
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return {
            "ok": True,
            "dialect": engine.dialect.name,
            "database": engine.url.database,
        }
    except SQLAlchemyError as exc:
        logger.error("Database health check failed: %s", exc)
        return {
            "ok": False,
            "error": str(exc),
        }
