import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from movie_helper.config import Settings
from movie_helper.logging_setup import setup_logging
from movie_helper.routers import recommend
from movie_helper.services.recommendation import RecommendationService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Mini AI Assistant is up.")
    yield


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg") if errors else "unreadable"
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {detail}"})


def create_app(settings: Optional[Settings] = None, service: Optional[RecommendationService] = None) -> FastAPI:
    setup_logging()
    settings = settings or Settings.from_env()

    # --- SERVICE INITIALIZATION ---
    if service is None:
        missing = settings.missing_keys()
        if missing:
            logger.critical(f"Missing environment values: {', '.join(missing)}")
        settings.validate_required()
        service = RecommendationService.from_settings(settings)

    # --- APP CONFIGURATION ---
    app = FastAPI(title="Movie Helper", lifespan=lifespan)
    app.state.settings = settings
    app.state.recommendation_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # --- ROUTERS ---
    @app.get("/health")
    def health_check():
        return {"ok": True}

    app.include_router(recommend.router)

    # Static assets go last so they never shadow the API routes.
    if os.path.isdir(settings.public_dir):
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")

    return app


def run():
    uvicorn.run(
        "movie_helper.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )


if __name__ == "__main__":
    run()
