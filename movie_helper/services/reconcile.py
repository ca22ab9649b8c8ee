from typing import List, Optional

from movie_helper.schemas import Movie, Pick, RecommendedPick


def _normalize_title(value: Optional[str]) -> str:
    return (value or "").lower()


def find_movie(title: Optional[str], candidates: List[Movie]) -> Optional[Movie]:
    if not title:
        return None
    needle = _normalize_title(title)
    return next((movie for movie in candidates if _normalize_title(movie.title) == needle), None)


def reconcile(picks: List[Pick], candidates: List[Movie]) -> List[RecommendedPick]:
    """Attaches candidate details to each pick; unmatched picks are kept bare."""
    enriched = []
    for pick in picks:
        match = find_movie(pick.title, candidates)
        if match is None:
            enriched.append(RecommendedPick(title=pick.title, why=pick.why))
            continue
        enriched.append(
            RecommendedPick(
                title=pick.title,
                why=pick.why,
                poster=match.poster,
                year=match.year or None,
                genres=list(match.genres),
                overview=match.overview or "",
            )
        )
    return enriched
