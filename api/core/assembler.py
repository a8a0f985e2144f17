from __future__ import annotations

import random
from typing import Annotated, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .catalog import AnnotatedCatalogItem, CatalogItem
from .enrichment import DoubleFeature, Enrichment, PerfectPairing
from .fallback_catalog import EMERGENCY_EXPLANATION, EMERGENCY_MOVIES, EMERGENCY_NOTE
from .mood_intent import Intensity, MoodIntent
from .time_context import TimeContext

TOP_N = 3
RUNTIME_ESTIMATE_RANGE = (90, 119)
EMERGENCY_ERROR = "Failed to generate personalized recommendations"

_MOVIE_CONTEXTS: Dict[str, List[str]] = {
    "stressed": [
        "This film's gentle pacing will help slow your racing thoughts",
        "The beautiful cinematography serves as visual meditation",
        "A story that asks nothing of you but to watch and smile",
    ],
    "sad": [
        "Characters who understand pain but choose hope anyway",
        "A narrative that honors difficult emotions while suggesting healing",
        "The kind of film that sits with you in your feelings",
    ],
    "adventurous": [
        "Buckle up for a ride that never lets up",
        "Epic in scope and ambition, matching your energy",
        "The cinematic equivalent of your favorite roller coaster",
    ],
    "thoughtful": [
        "Layers upon layers of meaning to unpack",
        "A film that respects your intelligence",
        "Will have you thinking about it days later",
    ],
    "romantic": [
        "Chemistry so palpable you can feel it through the screen",
        "Romance done right, neither cheesy nor cynical",
        "Will make you believe in love again",
    ],
    "nostalgic": [
        "Takes you back to a time when everything felt possible",
        "The kind of movie that makes you call an old friend",
        "Captures the bittersweet beauty of looking back",
    ],
    "general": [
        "A crowd-pleaser with real craft behind it",
        "Exactly the kind of film that earns its reputation",
        "Easy to start, hard to stop",
    ],
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MoodAnalysis(_CamelModel):
    primary_emotion: str
    intensity: Intensity
    desired_outcome: str


class ResponseContext(_CamelModel):
    time: TimeContext


class ConversationalResponse(_CamelModel):
    kind: Literal["conversational"] = "conversational"
    conversational: Literal[True] = True
    response: str
    context: ResponseContext


class MovieRecommendationResponse(_CamelModel):
    kind: Literal["recommendation"] = "recommendation"
    movies: List[AnnotatedCatalogItem] = Field(min_length=1, max_length=TOP_N)
    explanation: str
    sommelier_note: str
    perfect_pairing: PerfectPairing
    double_feature: Optional[DoubleFeature] = None
    contextual_note: str = ""
    palette_cleansers: List[str] = Field(default_factory=list)
    mood_analysis: MoodAnalysis
    context: ResponseContext
    response_movies: List[AnnotatedCatalogItem] = Field(default_factory=list)


class EmergencyResponse(_CamelModel):
    kind: Literal["emergency"] = "emergency"
    error: str = EMERGENCY_ERROR
    fallback: Literal[True] = True
    movies: List[AnnotatedCatalogItem] = Field(min_length=TOP_N, max_length=TOP_N)
    explanation: str
    sommelier_note: str


RecommendationResponse = Annotated[
    Union[ConversationalResponse, MovieRecommendationResponse, EmergencyResponse],
    Field(discriminator="kind"),
]


def annotate_movies(
    items: Sequence[CatalogItem],
    emotion: str,
    rng: random.Random | None = None,
    limit: int = TOP_N,
) -> List[AnnotatedCatalogItem]:
    """Top titles with a per-emotion flavor line and a runtime estimate."""
    rng = rng or random.Random()
    contexts = _MOVIE_CONTEXTS.get(emotion, _MOVIE_CONTEXTS["general"])
    annotated: List[AnnotatedCatalogItem] = []
    for item in items[:limit]:
        data = item.model_dump()
        data["runtime"] = item.runtime or rng.randint(*RUNTIME_ESTIMATE_RANGE)
        data["ai_context"] = rng.choice(contexts)
        annotated.append(AnnotatedCatalogItem.model_validate(data))
    return annotated


def build_conversational(reply: str, time_context: TimeContext) -> ConversationalResponse:
    return ConversationalResponse(
        response=reply, context=ResponseContext(time=time_context)
    )


def build_recommendation(
    intent: MoodIntent,
    items: Sequence[CatalogItem],
    enrichment: Enrichment,
    time_context: TimeContext,
    rng: random.Random | None = None,
) -> MovieRecommendationResponse:
    movies = annotate_movies(items, intent.primary_emotion, rng)
    return MovieRecommendationResponse(
        movies=movies,
        explanation=intent.explanation,
        sommelier_note=intent.sommelier_note,
        perfect_pairing=enrichment.perfect_pairing,
        double_feature=enrichment.double_feature,
        contextual_note=enrichment.atmosphere_note,
        palette_cleansers=enrichment.palette_cleansers,
        mood_analysis=MoodAnalysis(
            primary_emotion=intent.primary_emotion,
            intensity=intent.intensity,
            desired_outcome=intent.desired_outcome,
        ),
        context=ResponseContext(time=time_context),
        response_movies=[movie.model_copy() for movie in movies],
    )


def build_emergency() -> EmergencyResponse:
    return EmergencyResponse(
        movies=[AnnotatedCatalogItem.model_validate(raw) for raw in EMERGENCY_MOVIES],
        explanation=EMERGENCY_EXPLANATION,
        sommelier_note=EMERGENCY_NOTE,
    )
