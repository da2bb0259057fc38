"""
Audit field stamping.

``AuditableEntityInterceptor`` is attached to a session as a ``before_flush``
listener. On every flush it walks the entities tracked by the session and,
for each ``AuditableBase`` entity:

- newly added: stamps ``created_by`` / ``created``
- added, modified, or with a changed owned sub-entity: stamps
  ``last_modified_by`` / ``last_modified``

The user id is read from ``session.info["user_id"]`` unless a provider is
given; request dependencies put the authenticated user there.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from sqlalchemy import event, inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from dashitoon.core.logging_config import get_logger

from .base import AuditableBase

logger = get_logger(__name__)

USER_ID_KEY = "user_id"

Clock = Callable[[], datetime]
UserProvider = Callable[[Session], Optional[str]]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _session_user(session: Session) -> Optional[str]:
    return session.info.get(USER_ID_KEY)


def set_audit_user(session: AsyncSession | Session, user_id: Optional[str]) -> None:
    """Record the acting user on a session for subsequent flushes."""
    session.info[USER_ID_KEY] = user_id


class AuditableEntityInterceptor:
    """Stamps creator/modifier metadata on auditable entities at flush time."""

    def __init__(self, user: Optional[UserProvider] = None, clock: Optional[Clock] = None) -> None:
        self._user = user or _session_user
        self._clock = clock or _utc_now

    def attach(self, session: AsyncSession | Session) -> None:
        """Register the interceptor on one session (async sessions use their sync core)."""
        target = session.sync_session if isinstance(session, AsyncSession) else session
        if not event.contains(target, "before_flush", self.before_flush):
            event.listen(target, "before_flush", self.before_flush)

    def detach(self, session: AsyncSession | Session) -> None:
        target = session.sync_session if isinstance(session, AsyncSession) else session
        if event.contains(target, "before_flush", self.before_flush):
            event.remove(target, "before_flush", self.before_flush)

    def before_flush(self, session: Session, flush_context: Any, instances: Any) -> None:
        self.update_entities(session)

    def update_entities(self, session: Session) -> None:
        user_id = self._user(session)
        utc_now: Optional[datetime] = None

        for entity in self._tracked_auditables(session):
            added = entity in session.new
            modified = entity in session.dirty and session.is_modified(entity)
            if not (added or modified or self.has_changed_owned_entities(session, entity)):
                continue

            if utc_now is None:
                utc_now = self._clock()
            if added:
                entity.created_by = user_id
                entity.created = utc_now
            entity.last_modified_by = user_id
            entity.last_modified = utc_now
            logger.debug(f"Audit stamped {type(entity).__name__} added={added} by={user_id}")

    @staticmethod
    def _tracked_auditables(session: Session) -> Iterable[AuditableBase]:
        seen: set[int] = set()
        for entity in list(session.new) + list(session.identity_map.values()):
            if isinstance(entity, AuditableBase) and id(entity) not in seen:
                seen.add(id(entity))
                yield entity

    @staticmethod
    def has_changed_owned_entities(session: Session, entity: AuditableBase) -> bool:
        """Whether any loaded owned sub-entity was added, modified or removed.

        Unloaded relationships are skipped: nothing in them can have changed.
        """
        state = inspect(entity)
        for name in entity.__audit_owned__:
            if name in state.unloaded:
                continue
            attr = state.attrs[name]
            if attr.history.has_changes():
                return True
            value = attr.value
            children = value if isinstance(value, (list, tuple, set)) else [value]
            for child in children:
                if child is None:
                    continue
                if child in session.new or child in session.deleted:
                    return True
                if child in session.dirty and session.is_modified(child):
                    return True
        return False
