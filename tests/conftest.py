from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient

from movie_helper.config import Settings
from movie_helper.main import create_app
from movie_helper.schemas import Movie
from movie_helper.services.explainer import ExplanationGenerator
from movie_helper.services.recommendation import RecommendationService
from movie_helper.services.tmdb import MovieFetcher


class StubModel:
    """Stands in for genai.GenerativeModel."""

    def __init__(self, text=None, error=None, response=None):
        self.text = text
        self.error = error
        self.response = response
        self.calls = []

    async def generate_content_async(self, prompt, **kwargs):
        self.calls.append((prompt, kwargs))
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return SimpleNamespace(text=self.text)


@pytest.fixture
def tmdb_results():
    return [
        {
            "title": "Arrival",
            "release_date": "2016-11-10",
            "overview": "A linguist works with the military to talk to aliens.",
            "genre_ids": [18, 878],
            "poster_path": "/arrival.jpg",
        },
        {
            "title": "Inception",
            "release_date": "2010-07-15",
            "overview": "A thief who steals secrets through dreams.",
            "genre_ids": [28, 878, 12],
            "poster_path": "/inception.jpg",
        },
        {
            "title": "Prisoners",
            "release_date": "",
            "overview": "A father takes matters into his own hands.",
            "genre_ids": [18, 53, 9648],
            "poster_path": None,
        },
    ]


@pytest.fixture
def many_tmdb_results():
    return [
        {"title": f"Movie {i}", "release_date": f"20{i:02d}-01-01", "genre_ids": [878], "poster_path": f"/{i}.jpg"}
        for i in range(15)
    ]


@pytest.fixture
def candidates():
    return [
        Movie(title="Arrival", year="2016", overview="Aliens.", genres=["drama", "sci-fi"], poster="https://image.tmdb.org/t/p/w500/arrival.jpg"),
        Movie(title="Inception", year="2010", overview="Dreams.", genres=["action", "sci-fi", "adventure"], poster=None),
        Movie(title="Prisoners", year="", overview="", genres=["drama", "thriller"], poster=None),
    ]


@pytest.fixture
def tmdb_stub():
    """Factory for a MockTransport serving canned /discover/movie replies."""

    def make(results=None, status_code=200):
        seen = []

        def handler(request):
            seen.append(request)
            if status_code != 200:
                return httpx.Response(status_code, json={"status_message": "Internal error."})
            return httpx.Response(200, json={"page": 1, "results": results or []})

        transport = httpx.MockTransport(handler)
        transport.requests = seen
        return transport

    return make


@pytest.fixture
def stub_model():
    return StubModel


@pytest.fixture
def make_client(tmdb_stub, tmp_path):
    def make(results=None, status_code=200, mock_mode=True, model=None, public_dir=None):
        transport = tmdb_stub(results, status_code)
        settings = Settings(
            tmdb_key="test-key",
            mock_llm=mock_mode,
            public_dir=public_dir or str(tmp_path / "no-public"),
        )
        service = RecommendationService(
            MovieFetcher(api_key="test-key", transport=transport),
            ExplanationGenerator(mock_mode=mock_mode, model=model),
        )
        client = TestClient(create_app(settings, service))
        client.tmdb_requests = transport.requests
        return client

    return make
