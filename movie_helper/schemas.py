from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Preferences(BaseModel):
    """Viewer preferences, echoed back exactly as supplied.

    Wire names are camelCase and unknown keys are kept. Values are not
    type-checked here; the discovery query skips whatever it cannot use.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    genres: Any = None
    mood: Any = None
    year_range: Any = Field(default=None, alias="yearRange")
    language: Any = None
    avoid: Any = None


class Movie(BaseModel):
    title: str = ""
    year: str = ""
    overview: str = ""
    genres: List[str] = []
    poster: Optional[str] = None


class Pick(BaseModel):
    title: str = ""
    why: str = ""


class ExplanationResult(BaseModel):
    picks: List[Pick] = []


class RecommendedPick(BaseModel):
    title: str
    why: str
    poster: Optional[str] = None
    year: Optional[str] = None
    genres: List[str] = []
    overview: str = ""


class RecommendationRequest(BaseModel):
    prefs: Any = None
    limit: Any = None


class RecommendationResponse(BaseModel):
    picks: List[RecommendedPick]
    prefs: Preferences
    disclaimer: str
