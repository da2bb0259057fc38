"""
Chapter entity models.

A chapter owns an ordered history of versions: drafts written by the author,
periodic auto-save snapshots and the version that was published. The chapter
keeps a pointer to the version being edited (``current_version_id``) and,
once published, to the version readers see (``published_version_id``).

Invariants:
- a chapter always has a current version, and it is one of its own versions
- the current and published versions cannot be deleted
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, List, Optional, Tuple

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, Text

from dashitoon.core.errors import ChapterVersionInUseError, NotFoundError
from dashitoon.core.models.domain.enums import ChapterStatus

from ..base import AuditableBase, Base

if TYPE_CHECKING:
    from .volumes import Volume

INITIAL_VERSION_NAME = "Initial version"


class ChapterVersion(Base, table=True):
    """Entity for one snapshot of a chapter's content.

    Owned by ``Chapter``.

    Table: chapter_versions
    """

    __tablename__ = "chapter_versions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    chapter_id: Optional[int] = Field(default=None, foreign_key="chapters.id", index=True, ondelete="CASCADE")

    version_name: str = Field(max_length=255)
    title: str = Field(max_length=255)
    thumbnail: Optional[str] = Field(default=None, max_length=100)
    content: str = Field(sa_type=Text)
    note: Optional[str] = Field(default=None, max_length=5000)
    is_auto_save: bool = Field(default=False)
    status: ChapterStatus = Field(default=ChapterStatus.draft)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True)
    )

    chapter: Optional["Chapter"] = Relationship(back_populates="versions")

    def __repr__(self) -> str:
        return f"ChapterVersion(id={self.id}, name={self.version_name}, status={self.status.value})"


class Chapter(AuditableBase, table=True):
    """Entity for a chapter and its version pointers.

    Table: chapters
    """

    __tablename__ = "chapters"
    __audit_owned__: ClassVar[Tuple[str, ...]] = ("versions",)

    id: Optional[int] = Field(default=None, primary_key=True)
    volume_id: int = Field(foreign_key="volumes.id", index=True, ondelete="CASCADE")
    chapter_number: int = Field()

    current_version_id: uuid.UUID = Field()
    published_version_id: Optional[uuid.UUID] = Field(default=None)
    published_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    volume: Optional["Volume"] = Relationship(back_populates="chapters")
    versions: List[ChapterVersion] = Relationship(
        back_populates="chapter",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True, "order_by": "ChapterVersion.timestamp"},
    )

    @classmethod
    def create(
        cls,
        *,
        volume_id: int,
        chapter_number: int,
        title: str,
        content: str,
        thumbnail: Optional[str] = None,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Chapter":
        """Create a chapter with its initial draft version."""
        version = ChapterVersion(
            version_name=INITIAL_VERSION_NAME,
            title=title,
            content=content,
            thumbnail=thumbnail,
            note=note,
            timestamp=now or datetime.now(timezone.utc),
        )
        chapter = cls(volume_id=volume_id, chapter_number=chapter_number, current_version_id=version.id)
        chapter.versions.append(version)
        return chapter

    @property
    def current_version(self) -> ChapterVersion:
        return self.get_version(self.current_version_id)

    @property
    def published_version(self) -> Optional[ChapterVersion]:
        if self.published_version_id is None:
            return None
        return self.get_version(self.published_version_id)

    @property
    def is_published(self) -> bool:
        return self.published_version_id is not None

    def find_version(self, version_id: uuid.UUID) -> Optional[ChapterVersion]:
        return next((v for v in self.versions if v.id == version_id), None)

    def get_version(self, version_id: uuid.UUID) -> ChapterVersion:
        version = self.find_version(version_id)
        if version is None:
            raise NotFoundError(str(version_id), "ChapterVersion")
        return version

    def add_version(
        self,
        *,
        title: str,
        content: str,
        thumbnail: Optional[str] = None,
        note: Optional[str] = None,
        is_auto_save: bool = False,
        version_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ChapterVersion:
        """Append a draft (or auto-save) version and make it current."""
        timestamp = now or datetime.now(timezone.utc)
        if version_name is None:
            prefix = "Auto-save" if is_auto_save else "Draft"
            version_name = f"{prefix} {timestamp:%Y-%m-%d %H:%M:%S}"
        version = ChapterVersion(
            version_name=version_name,
            title=title,
            content=content,
            thumbnail=thumbnail,
            note=note,
            is_auto_save=is_auto_save,
            timestamp=timestamp,
        )
        self.versions.append(version)
        self.current_version_id = version.id
        return version

    def publish(self, now: Optional[datetime] = None) -> ChapterVersion:
        """Publish the current version.

        A previously published version goes back to draft. The first publication
        date is kept when a newer version is republished.
        """
        version = self.current_version
        previous = self.published_version
        if previous is not None and previous is not version:
            previous.status = ChapterStatus.draft
        version.status = ChapterStatus.published
        self.published_version_id = version.id
        if self.published_date is None:
            self.published_date = now or datetime.now(timezone.utc)
        return version

    def unpublish(self) -> None:
        previous = self.published_version
        if previous is not None:
            previous.status = ChapterStatus.draft
        self.published_version_id = None
        self.published_date = None

    def restore_version(self, version_id: uuid.UUID, now: Optional[datetime] = None) -> ChapterVersion:
        """Copy an older version into a new draft and make it current."""
        source = self.get_version(version_id)
        return self.add_version(
            title=source.title,
            content=source.content,
            thumbnail=source.thumbnail,
            note=source.note,
            version_name=f"Restored from {source.version_name}"[:255],
            now=now,
        )

    def rename_version(self, version_id: uuid.UUID, version_name: str) -> ChapterVersion:
        version = self.get_version(version_id)
        version.version_name = version_name
        return version

    def remove_version(self, version_id: uuid.UUID) -> ChapterVersion:
        """Remove a version from the history.

        Raises:
            NotFoundError: the version does not belong to this chapter
            ChapterVersionInUseError: the version is the current or published one
        """
        version = self.get_version(version_id)
        if version.id == self.current_version_id:
            raise ChapterVersionInUseError(str(version_id), "current")
        if version.id == self.published_version_id:
            raise ChapterVersionInUseError(str(version_id), "published")
        self.versions.remove(version)
        return version

    def __repr__(self) -> str:
        return f"Chapter(id={self.id}, volume_id={self.volume_id}, chapter_number={self.chapter_number})"
