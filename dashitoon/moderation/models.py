"""
Moderation result models.
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field


class ModerationAnalysis(BaseModel):
    """Outcome of screening one piece of text."""

    flagged: bool = Field(description="Whether any category was flagged")
    categories: Dict[str, bool] = Field(default_factory=dict, description="Per-category flag")
    category_scores: Dict[str, float] = Field(default_factory=dict, description="Per-category confidence")

    @property
    def flagged_categories(self) -> list[str]:
        return sorted(name for name, hit in self.categories.items() if hit)
