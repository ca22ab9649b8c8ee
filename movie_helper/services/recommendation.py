import logging
from typing import Any, Optional

from movie_helper.config import Settings
from movie_helper.schemas import RecommendationResponse
from movie_helper.services.explainer import ExplanationGenerator, create_model
from movie_helper.services.preferences import clamp_limit, resolve_preferences
from movie_helper.services.reconcile import reconcile
from movie_helper.services.tmdb import MovieFetcher

logger = logging.getLogger(__name__)

DISCLAIMER = "For entertainment purposes."


class RecommendationService:
    def __init__(self, fetcher: MovieFetcher, explainer: ExplanationGenerator):
        self.fetcher = fetcher
        self.explainer = explainer

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecommendationService":
        model = None
        if not settings.mock_llm:
            model = create_model(settings.gemini_key, settings.gemini_model_id)
        else:
            logger.info("MOCK_LLM is on, picks are explained locally.")
        fetcher = MovieFetcher(
            api_key=settings.tmdb_key,
            base_url=settings.tmdb_base_url,
            timeout=settings.tmdb_timeout,
        )
        explainer = ExplanationGenerator(
            mock_mode=settings.mock_llm,
            model=model,
            timeout=settings.gemini_timeout,
        )
        return cls(fetcher, explainer)

    async def recommend(self, prefs_overrides: Any = None, raw_limit: Optional[Any] = None) -> RecommendationResponse:
        # 1. SETUP
        prefs = resolve_preferences(prefs_overrides)
        limit = clamp_limit(raw_limit)
        logger.debug(f"Recommending {limit} picks for genres={prefs.genres} mood={prefs.mood!r}")

        # 2. CANDIDATES
        movies = await self.fetcher.fetch(prefs)

        # 3. EXPLAIN
        reasons = await self.explainer.explain(prefs, movies, limit)

        # 4. ASSEMBLE RESPONSE
        picks = reconcile(reasons.picks, movies)
        logger.info(f"Returning {len(picks)} picks from {len(movies)} candidates.")
        return RecommendationResponse(picks=picks, prefs=prefs, disclaimer=DISCLAIMER)
