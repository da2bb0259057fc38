"""
Review and report I/O models.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from dashitoon.core.models.domain.enums import ReportType


class ReviewCreate(BaseModel):
    """Schema for posting a review on a series."""

    content: str = Field(min_length=1, max_length=5000)
    is_recommended: bool = True


class ReviewRead(BaseModel):
    """Schema for reading a review."""

    id: uuid.UUID
    series_id: int
    user_id: str
    content: str
    is_recommended: bool
    created: Optional[datetime] = None
    last_modified: Optional[datetime] = None

    class Config:
        from_attributes = True


class ReportRead(BaseModel):
    """Schema for reading a report."""

    id: uuid.UUID
    reported_id: str
    type: ReportType
    reported_by: Optional[str] = None
    reason: str
    reported_at: datetime
    analytics: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True
