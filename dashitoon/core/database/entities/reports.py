"""
Report entity models.

Reports flag content for administrator attention. They are filed by users or,
when ``reported_by`` is empty, by the system itself (for instance when the
moderation service flags a review).
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, DateTime
from sqlmodel import Field, Text

from dashitoon.core.models.domain.enums import ReportType

from ..base import Base

SYSTEM_REPORT_REASON = "Flagged by automated moderation"


class Report(Base, table=True):
    """Entity for a content report.

    Table: reports
    """

    __tablename__ = "reports"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    reported_id: str = Field(max_length=64, index=True)
    type: ReportType = Field(index=True)
    reported_by: Optional[str] = Field(default=None, max_length=450)
    reason: str = Field(sa_type=Text)
    reported_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True), index=True
    )
    analytics: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)

    @classmethod
    def create_new_system_report(cls, type: ReportType, reported_id: Any, now: Optional[datetime] = None) -> "Report":
        """Build a report filed by the platform rather than a user."""
        return cls(
            reported_id=str(reported_id),
            type=type,
            reported_by=None,
            reason=SYSTEM_REPORT_REASON,
            reported_at=now or datetime.now(timezone.utc),
        )

    @classmethod
    def create_new_user_report(cls, type: ReportType, reported_id: Any, reported_by: str, reason: str) -> "Report":
        return cls(reported_id=str(reported_id), type=type, reported_by=reported_by, reason=reason)

    @property
    def is_system_report(self) -> bool:
        return self.reported_by is None

    def add_analytics(self, analysis: Any) -> None:
        """Attach the moderation payload (a pydantic model or a plain mapping)."""
        if hasattr(analysis, "model_dump"):
            analysis = analysis.model_dump(mode="json")
        self.analytics = dict(analysis)

    def __repr__(self) -> str:
        return f"Report(id={self.id}, type={self.type.value}, reported_id={self.reported_id})"
