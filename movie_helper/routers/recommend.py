import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from movie_helper.schemas import RecommendationRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(error: Exception) -> JSONResponse:
    # every failure is a 400, whatever the cause
    return JSONResponse(status_code=400, content={"error": str(error) or error.__class__.__name__})


@router.post("/recommend")
async def recommend_movies(request: Request, req: Optional[RecommendationRequest] = None):
    req = req or RecommendationRequest()
    service = request.app.state.recommendation_service
    try:
        result = await service.recommend(req.prefs, req.limit)
    except Exception as e:
        logger.exception(f"Recommendation failed: {e}")
        return error_response(e)
    return result.model_dump(by_alias=True)
