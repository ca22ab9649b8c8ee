import asyncio
import json
import logging
from typing import Any, List, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from movie_helper.exceptions import ConfigurationError, UpstreamError
from movie_helper.schemas import ExplanationResult, Movie, Pick, Preferences

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    'Recommend movies. Respond with JSON only: {"picks":[{"title":"","why":""}]}. '
    'Each "why" under 20 words, no spoilers.'
)
MAX_OUTPUT_TOKENS = 400


def create_model(api_key: str, model_id: str) -> "genai.GenerativeModel":
    """Configures the Gemini SDK and returns the shared model handle."""
    genai.configure(api_key=api_key)
    model = genai.GenerativeModel(model_id, system_instruction=SYSTEM_PROMPT)
    logger.info(f"Connected to Gemini ({model_id}).")
    return model


def build_prompt(prefs: Preferences, candidates: List[Movie], limit: int) -> str:
    prefs_json = json.dumps(prefs.model_dump(by_alias=True), indent=2)
    movies_json = json.dumps([movie.model_dump() for movie in candidates], indent=2)
    return (
        f"User preferences:\n{prefs_json}\n\n"
        f"Candidate movies:\n{movies_json}\n\n"
        f"Pick up to {limit} movies and explain why each fits."
    )


def response_text(response: Any) -> str:
    """Generated text out of a Gemini response, or "" if there is none."""
    try:
        return response.text or ""
    except (ValueError, AttributeError, IndexError) as e:
        # .text raises ValueError when the candidate was blocked or empty
        logger.warning(f"Gemini response carried no text: {e}")
        return ""


def parse_picks(text: str, limit: int) -> List[Pick]:
    """Best-effort read of {"picks": [...]} out of free model text.

    Takes everything from the first "{" to the last "}" and parses it as
    JSON. Any failure yields an empty list; this never raises.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return []
    try:
        payload = json.loads(text[start : end + 1])
    except (ValueError, RecursionError):
        return []

    raw_picks = payload.get("picks") if isinstance(payload, dict) else None
    if not isinstance(raw_picks, list):
        return []

    picks = []
    for entry in raw_picks:
        if not isinstance(entry, dict):
            continue
        picks.append(Pick(title=str(entry.get("title") or ""), why=str(entry.get("why") or "")))
    return picks[:limit]


def mock_reasons(prefs: Preferences, candidates: List[Movie], limit: int) -> ExplanationResult:
    mood = prefs.mood or "requested"
    return ExplanationResult(
        picks=[
            Pick(
                title=movie.title,
                why=f'Matches your "{mood}" mood with {"/".join(movie.genres[:2])} energy.',
            )
            for movie in candidates[:limit]
        ]
    )


class ExplanationGenerator:
    """Turns candidates into short, explained picks, via Gemini or a local template."""

    def __init__(self, mock_mode: bool, model: Optional[Any] = None, timeout: float = 30.0):
        if not mock_mode and model is None:
            raise ConfigurationError("Live explanation mode needs a generative model")
        self.mock_mode = mock_mode
        self.model = model
        self.timeout = timeout

    async def explain(self, prefs: Preferences, candidates: List[Movie], limit: int = 5) -> ExplanationResult:
        if self.mock_mode:
            return mock_reasons(prefs, candidates, limit)

        prompt = build_prompt(prefs, candidates, limit)
        try:
            response = await self.model.generate_content_async(
                prompt,
                generation_config={"max_output_tokens": MAX_OUTPUT_TOKENS},
                request_options={"timeout": self.timeout},
            )
        except google_exceptions.GoogleAPIError as e:
            raise UpstreamError(f"Gemini request failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise UpstreamError(f"Gemini request timed out after {self.timeout}s") from e

        picks = parse_picks(response_text(response), limit)
        if not picks:
            logger.warning("Gemini reply had no usable picks, returning none.")
        return ExplanationResult(picks=picks)
