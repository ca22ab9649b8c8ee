from typing import Any, List, Optional

# Friendly genre names mapped to TMDB ids (only the ones we need).
GENRES = {
    "action": 28,
    "adventure": 12,
    "comedy": 35,
    "drama": 18,
    "horror": 27,
    "romance": 10749,
    "thriller": 53,
    "sci-fi": 878,
}

GENRE_NAMES = {genre_id: name for name, genre_id in GENRES.items()}


def _as_list(values: Any) -> list:
    return list(values) if isinstance(values, (list, tuple, set)) else []


def to_identifiers(names: Any) -> Optional[str]:
    """Comma-joined TMDB ids for the known names, or None to omit the filter."""
    ids = [str(GENRES[name]) for name in _as_list(names) if isinstance(name, str) and name in GENRES]
    return ",".join(ids) if ids else None


def to_names(ids: Any) -> List[str]:
    return [GENRE_NAMES[genre_id] for genre_id in _as_list(ids) if isinstance(genre_id, int) and genre_id in GENRE_NAMES]
