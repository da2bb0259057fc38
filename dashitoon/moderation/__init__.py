"""
Automated content moderation.

Thin async client for an OpenAI-compatible moderation endpoint, used to
screen reader-submitted text such as reviews.
"""

from .client import ModerationClient, ModerationService
from .errors import ModerationError
from .models import ModerationAnalysis

__all__ = ["ModerationAnalysis", "ModerationClient", "ModerationError", "ModerationService"]
