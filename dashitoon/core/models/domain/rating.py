"""Content rating rubric.

Authors rate a series against six fixed categories, each with an option
from 0 (none) to 3 (explicit). The overall rating is the strictest option
chosen in any category.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from dashitoon.core.errors import ValidationError

from .enums import ContentCategory, ContentRating

MIN_OPTION = 0
MAX_OPTION = 3


def calculate_content_rating(options: Iterable[Optional[int]]) -> Optional[ContentRating]:
    """Map category options to an overall rating.

    Unanswered categories (``None``) are ignored; when nothing has been
    answered the series is unrated and ``None`` is returned.
    """
    answered = [option for option in options if option is not None]
    if not answered:
        return None
    for option in answered:
        if not MIN_OPTION <= option <= MAX_OPTION:
            raise ValidationError(
                f"Rating option {option} is out of range.",
                errors={"categoryRatings": [f"Option must be between {MIN_OPTION} and {MAX_OPTION}."]},
            )
    return ContentRating(max(answered))


def rate_series(category_ratings: Mapping[ContentCategory, int]) -> ContentRating:
    """Validate a complete rubric and return the series rating.

    Every one of the six categories must be rated exactly once.
    """
    missing = [category.name for category in ContentCategory if category not in category_ratings]
    if missing or len(category_ratings) != len(ContentCategory):
        raise ValidationError(
            "All 6 category ratings are required.",
            errors={"categoryRatings": [f"Missing ratings for: {', '.join(missing)}"] if missing else ["Unknown category."]},
        )
    rating = calculate_content_rating(category_ratings.values())
    return ContentRating.all_ages if rating is None else rating


def ratings_from_pairs(pairs: Iterable[tuple[int, int]]) -> dict[ContentCategory, int]:
    """Build a rubric mapping from ``(category, option)`` pairs, rejecting duplicates."""
    result: dict[ContentCategory, int] = {}
    for category_value, option in pairs:
        try:
            category = ContentCategory(category_value)
        except ValueError:
            raise ValidationError(
                f"Unknown content category {category_value}.",
                errors={"categoryRatings": [f"Unknown category {category_value}."]},
            ) from None
        if category in result:
            raise ValidationError(
                f"Category {category.name} is rated more than once.",
                errors={"categoryRatings": [f"Duplicate category {category.name}."]},
            )
        result[category] = option
    return result
