"""Error types for the DashiToon application layer.

Handlers raise these as-is; the HTTP layer maps them to status codes
(see ``dashitoon.server.exception_handlers``).
"""

from __future__ import annotations

from typing import Dict, List, Optional


class DashiToonError(Exception):
    """Base error for all application exceptions."""


class NotFoundError(DashiToonError):
    """Raised when an aggregate or one of its sub-entities does not exist."""

    def __init__(self, key: str, name: str) -> None:
        super().__init__(f'Entity "{name}" ({key}) was not found.')
        self.key = key
        self.name = name


class ForbiddenAccessError(DashiToonError):
    """Raised when the current user does not own or may not touch a resource."""

    def __init__(self, message: str = "You do not have access to this resource.") -> None:
        super().__init__(message)


class UnauthorizedError(DashiToonError):
    """Raised when a request carries no resolvable user identity."""

    def __init__(self, message: str = "Authentication is required.") -> None:
        super().__init__(message)


class ValidationError(DashiToonError):
    """Raised when input is rejected by a business rule."""

    def __init__(self, message: str = "One or more validation failures have occurred.", errors: Optional[Dict[str, List[str]]] = None) -> None:
        super().__init__(message)
        self.errors: Dict[str, List[str]] = errors or {}


class ChapterVersionInUseError(ValidationError):
    """Raised when deleting the version a chapter currently points at."""

    def __init__(self, version_id: str, role: str) -> None:
        super().__init__(f"Version {version_id} is the {role} version of the chapter and cannot be deleted.")
        self.version_id = version_id
        self.role = role


class InsufficientKanaError(ValidationError):
    """Raised when a spend exceeds the user's balance."""

    def __init__(self, currency: str, balance: int, amount: int) -> None:
        super().__init__(f"Insufficient {currency}: balance {balance}, requested {amount}.")


class AlreadyCheckedInError(ValidationError):
    """Raised on a second daily check-in."""

    def __init__(self) -> None:
        super().__init__("You have already checked in today.")


class DuplicateSubscriptionError(ValidationError):
    """Raised when a user already holds a live subscription to the series."""

    def __init__(self, series_id: int) -> None:
        super().__init__(f"An active or pending subscription to series {series_id} already exists.")
