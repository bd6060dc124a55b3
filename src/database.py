"""
Database connection and session management.
Provides the async SQLAlchemy engine, session factory, and base class for models.
"""
from typing import AsyncIterator
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from .config import Settings

# Create base class for declarative models
Base = declarative_base()

# Largest value an INTEGER primary key can hold (signed 64-bit)
MAX_ID = 2**63 - 1


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.
    
    SQLite only enforces foreign keys when asked to, so every new
    SQLite connection switches them on.
    
    Args:
        settings: Application settings
        
    Returns:
        AsyncEngine: Engine shared by the whole process
    """
    engine = create_async_engine(settings.database_url, echo=settings.sql_echo)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create the session factory bound to the given engine."""
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Database dependency - Creates and yields a database session.
    
    The session is automatically closed after the request is processed,
    even if an exception occurs during request handling.
    
    Yields:
        AsyncSession: Database session
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as db:
        yield db
