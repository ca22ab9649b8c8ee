import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from movie_helper.config import TMDB_BASE_URL
from movie_helper.exceptions import UpstreamError
from movie_helper.schemas import Movie, Preferences
from movie_helper.services.genres import to_identifiers, to_names

logger = logging.getLogger(__name__)

IMAGE_BASE = "https://image.tmdb.org/t/p/w500"
DEFAULT_YEAR_RANGE = (2000, 2025)
MIN_VOTE_COUNT = 500
MAX_CANDIDATES = 10


def poster_url(poster_path: Optional[str]) -> Optional[str]:
    """Turns a TMDB poster path into an absolute image URL."""
    raw_path = (poster_path or "").strip()
    if not raw_path:
        return None
    if not raw_path.startswith("/"):
        raw_path = f"/{raw_path}"
    return f"{IMAGE_BASE}{raw_path}"


def format_movie(movie: Dict[str, Any]) -> Movie:
    return Movie(
        title=movie.get("title") or "",
        year=(movie.get("release_date") or "")[:4],
        overview=movie.get("overview") or "",
        genres=to_names(movie.get("genre_ids")),
        poster=poster_url(movie.get("poster_path")),
    )


def year_bounds(year_range: Any) -> Tuple[Any, Any]:
    """[start, end] from the preferences, or the default range if it is not a pair."""
    if not isinstance(year_range, (list, tuple)) or len(year_range) != 2:
        return DEFAULT_YEAR_RANGE
    start, end = year_range
    if not all(isinstance(year, (int, str)) and not isinstance(year, bool) for year in (start, end)):
        return DEFAULT_YEAR_RANGE
    return start, end


def build_discover_params(api_key: Optional[str], prefs: Preferences) -> Dict[str, Any]:
    start, end = year_bounds(prefs.year_range)
    language = prefs.language if isinstance(prefs.language, str) else None
    params = {
        "api_key": api_key,
        "with_genres": to_identifiers(prefs.genres),
        "without_genres": to_identifiers(prefs.avoid),
        "with_original_language": language or None,
        "primary_release_date.gte": f"{start}-01-01",
        "primary_release_date.lte": f"{end}-12-31",
        "sort_by": "popularity.desc",
        "vote_count.gte": MIN_VOTE_COUNT,
        "page": 1,
    }
    # httpx would send None as an empty value; TMDB needs the key left out
    return {key: value for key, value in params.items() if value is not None}


class MovieFetcher:
    """Candidate lookup against TMDB's /discover/movie endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = TMDB_BASE_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, prefs: Preferences) -> List[Movie]:
        params = build_discover_params(self.api_key, prefs)
        logger.debug(f"Discover query -> genres={params.get('with_genres')} avoid={params.get('without_genres')}")

        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            try:
                response = await client.get(f"{self.base_url}/discover/movie", params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise UpstreamError(f"TMDB request failed: {e.response.status_code}") from e
            except httpx.TimeoutException as e:
                raise UpstreamError(f"TMDB request timed out after {self.timeout}s") from e
            except httpx.HTTPError as e:
                raise UpstreamError(f"TMDB request failed: {e.__class__.__name__}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("TMDB request failed: response was not JSON") from e
        if not isinstance(data, dict):
            raise UpstreamError("TMDB request failed: response was not a JSON object")

        results = data.get("results") or []
        if not isinstance(results, list):
            raise UpstreamError("TMDB request failed: results was not a list")
        movies = [format_movie(movie) for movie in results if isinstance(movie, dict)][:MAX_CANDIDATES]
        logger.info(f"Fetched {len(movies)} candidates from TMDB.")
        return movies
