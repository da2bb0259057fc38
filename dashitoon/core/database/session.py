"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access. Every session
handed out by ``get_session`` carries the audit interceptor.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlmodel.ext.asyncio.session import AsyncSession

from dashitoon.server.core.config import settings

from .audit import AuditableEntityInterceptor
from .utils import create_all, create_engine, create_sessionmaker

# Create global engine and session factory
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)
audit_interceptor = AuditableEntityInterceptor()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    One request is one unit of work; handlers commit explicitly.

    Yields:
        AsyncSession: An asynchronous SQLModel session with audit stamping attached.
    """
    async with async_session_maker() as session:
        audit_interceptor.attach(session)
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    Creates all tables defined in the entity metadata. In production, Alembic
    migrations are applied before the application starts and this is a no-op
    for existing tables.
    """
    await create_all(engine)
