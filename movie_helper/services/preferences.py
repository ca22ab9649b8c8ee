import math
from typing import Any

from movie_helper.schemas import Preferences

DEFAULT_PREFS = {
    "genres": ["sci-fi", "thriller"],
    "mood": "mind-bending but not too dark",
    "yearRange": [2005, 2025],
    "language": "en",
    "avoid": ["horror"],
}

DEFAULT_LIMIT = 5
MAX_LIMIT = 10


def resolve_preferences(overrides: Any = None) -> Preferences:
    """Shallow-merge caller overrides onto the defaults.

    A key present in ``overrides`` replaces the default value whole, lists and
    ``yearRange`` included. Anything that is not a mapping counts as no
    overrides at all.
    """
    merged = dict(DEFAULT_PREFS)
    if isinstance(overrides, dict):
        merged.update(overrides)
    return Preferences.model_validate(merged)


def clamp_limit(raw: Any) -> int:
    """Number of picks to ask for: missing, non-numeric or below 1 means the default."""
    if isinstance(raw, bool):
        return DEFAULT_LIMIT
    if isinstance(raw, int):
        # ints past float range are compared exactly
        return DEFAULT_LIMIT if raw < 1 else min(raw, MAX_LIMIT)
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_LIMIT
    if math.isnan(value) or value < 1:
        return DEFAULT_LIMIT
    return int(min(value, MAX_LIMIT))
