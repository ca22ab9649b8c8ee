import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from movie_helper.exceptions import ConfigurationError

# --- PATHS ---
# project root, one level above the package
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PUBLIC_DIR = os.path.join(BASE_DIR, "public")

TMDB_BASE_URL = "https://api.themoviedb.org/3"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() == "true"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    tmdb_key: Optional[str] = None
    gemini_key: Optional[str] = None
    gemini_model_id: Optional[str] = None
    mock_llm: bool = False
    tmdb_base_url: str = TMDB_BASE_URL
    tmdb_timeout: float = 10.0
    gemini_timeout: float = 30.0
    public_dir: str = PUBLIC_DIR

    @classmethod
    def from_env(cls) -> "Settings":
        # --- 🔒 SECURE CREDENTIALS ---
        return cls(
            tmdb_key=os.getenv("TMDB_KEY"),
            gemini_key=os.getenv("GEMINI_KEY"),
            gemini_model_id=os.getenv("GEMINI_MODEL_ID"),
            mock_llm=_env_flag("MOCK_LLM"),
            tmdb_base_url=os.getenv("TMDB_BASE_URL", TMDB_BASE_URL),
            tmdb_timeout=_env_float("TMDB_TIMEOUT", 10.0),
            gemini_timeout=_env_float("GEMINI_TIMEOUT", 30.0),
            public_dir=os.getenv("PUBLIC_DIR", PUBLIC_DIR),
        )

    def missing_keys(self) -> List[str]:
        required = {
            "TMDB_KEY": self.tmdb_key,
            "GEMINI_KEY": self.gemini_key,
            "GEMINI_MODEL_ID": self.gemini_model_id,
        }
        return [name for name, value in required.items() if not value]

    def validate_required(self) -> None:
        """Refuse to start a live service without its credentials."""
        missing = self.missing_keys()
        if missing and not self.mock_llm:
            raise ConfigurationError(f"Missing environment values: {', '.join(missing)}")
