"""
Database layer for DashiToon.

Structure:
- entities/: SQLModel entity models organized by aggregate
- repositories/: Data access layer organized by aggregate
- audit.py: Flush-time audit field stamping
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session factory, create_all)
"""

from .audit import AuditableEntityInterceptor, set_audit_user
from .base import AuditableBase, Base
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "AuditableBase",
    "AuditableEntityInterceptor",
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
    "set_audit_user",
]
