"""
Shared response schemas.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for handled application errors."""

    detail: str = Field(description="Human-readable error message")
    error_type: str = Field(description="Exception class name")
    errors: Optional[Dict[str, List[str]]] = Field(default=None, description="Field name to validation messages")


class HealthRead(BaseModel):
    status: str


class VersionRead(BaseModel):
    version: str
    schema_version: str
