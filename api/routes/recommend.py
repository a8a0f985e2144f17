from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, Field

from api.config import SERVICE_NAME, SERVICE_VERSION
from api.core import sommelier
from api.core.errors import InvalidMoodError

router = APIRouter(prefix="/api/recommend", tags=["recommend"])


class PreviousResult(BaseModel):
    items: List[Any] = Field(
        default_factory=list,
        description="Ids (or movie objects) shown on the previous turn.",
    )


class RecommendRequest(BaseModel):
    mood: Any = Field(None, description="Free-text description of the user's mood.")
    previous_result: Optional[PreviousResult] = Field(
        None,
        validation_alias=AliasChoices(
            "previousResult", "previousAnalysis", "previous_result"
        ),
    )


@router.post("")
async def recommend(request: Request, body: RecommendRequest) -> JSONResponse:
    """Pair films with the user's mood, or continue the conversation."""
    previous_items = body.previous_result.items if body.previous_result else None
    try:
        result = await sommelier.recommend(
            body.mood,
            previous_items,
            tmdb_client=getattr(request.app.state, "tmdb_client", None),
        )
    except InvalidMoodError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    return JSONResponse(content=result.model_dump(mode="json", by_alias=True))


@router.get("")
def describe_service():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "capabilities": [
            "Mood analysis with a generative classifier and keyword fallback",
            "TMDB integration",
            "Perfect pairing suggestions",
            "Double feature curation",
            "Contextual recommendations",
        ],
    }
