"""Error types specific to the moderation client.

Purpose:
- Provide a typed exception thrown by ``ModerationClient`` when the remote
  moderation API cannot be reached or answers with an error.
- Expose HTTP-oriented context (status code, error body) for diagnosis.
"""

from __future__ import annotations

from typing import Any, Optional


class ModerationError(Exception):
    """Base error for moderation failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional payload from the server (e.g., JSON body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details
