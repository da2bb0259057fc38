"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the database layer using SQLModel.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


class AuditableBase(Base):
    """Base class for entities that carry creator/modifier audit fields.

    The fields are written by ``AuditableEntityInterceptor`` at flush time and
    should never be assigned by handlers.

    ``__audit_owned__`` names the relationships whose rows are owned by this
    entity; a change to any of them also counts as a modification of the owner.
    """

    __audit_owned__: ClassVar[Tuple[str, ...]] = ()

    created: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True), nullable=False)
    created_by: Optional[str] = Field(default=None, max_length=450)
    last_modified: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True), nullable=False)
    last_modified_by: Optional[str] = Field(default=None, max_length=450)
