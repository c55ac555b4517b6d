from __future__ import annotations

from typing import Dict, List, Optional


CATEGORIES: List[Dict[str, str]] = [
    {"value": "public-holidays", "label": "Public Holidays"},
    {"value": "observances", "label": "Observances"},
    {"value": "academic", "label": "Academic Events"},
    {"value": "conferences", "label": "Conferences"},
    {"value": "concerts", "label": "Concerts"},
    {"value": "festivals", "label": "Festivals"},
    {"value": "performing-arts", "label": "Performing Arts"},
    {"value": "sports", "label": "Sports"},
    {"value": "community", "label": "Community Events"},
    {"value": "daylight-savings", "label": "Daylight Savings"},
    {"value": "politics", "label": "Politics"},
    {"value": "health-warnings", "label": "Health Warnings"},
    {"value": "severe-weather", "label": "Severe Weather"},
]

# Provider query filter used when the caller does not pick categories.
DEFAULT_CATEGORIES = (
    "public-holidays,observances,academic,conferences,"
    "concerts,festivals,performing-arts,sports"
)


def list_categories() -> List[Dict[str, str]]:
    return [dict(category) for category in CATEGORIES]


def category_label(value: str) -> str:
    for category in CATEGORIES:
        if category["value"] == value:
            return category["label"]
    return value.replace("-", " ").title()


def split_categories(raw: Optional[str]) -> List[str]:
    """Split a comma-separated category string, falling back to the defaults."""
    values = [part.strip() for part in (raw or "").split(",") if part.strip()]
    if values:
        return values
    return DEFAULT_CATEGORIES.split(",")
