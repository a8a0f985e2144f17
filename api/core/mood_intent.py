from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Intensity = Literal["low", "medium", "high"]
VALID_INTENSITIES = ("low", "medium", "high")

# Fields the generative classifier is asked to fill in.
PROMPT_SCHEMA_FIELDS = (
    "primary_emotion",
    "intensity",
    "desired_outcome",
    "genres",
    "exclude_genres",
    "keywords",
    "explanation",
    "sommelier_note",
)


def _coerce_genre_ids(value: Any) -> List[int]:
    if value is None:
        return []
    if isinstance(value, (int, str)):
        value = [value]
    ids: List[int] = []
    for entry in value:
        try:
            code = int(entry)
        except (TypeError, ValueError):
            continue
        if code not in ids:
            ids.append(code)
    return ids


class MoodIntent(BaseModel):
    """
    Structured interpretation of a user's mood text, built fresh for every request.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    primary_emotion: str = Field(
        "general", description="Detected emotion label (e.g. 'stressed')."
    )
    intensity: Intensity = Field("medium", description="Emotional intensity.")
    desired_outcome: str = Field(
        "", description="What the viewer wants to feel after watching."
    )
    genres: List[int] = Field(
        default_factory=list, description="TMDB genre ids to search, in priority order."
    )
    exclude_genres: List[int] = Field(
        default_factory=list, description="TMDB genre ids that clash with the mood."
    )
    keywords: str = Field("", description="Comma-separated free-text search terms.")
    genre_preference: Optional[List[int]] = Field(
        None, description="Genre explicitly requested during a refinement turn."
    )
    country_preference: Optional[str] = Field(
        None, description="Country phrase requested during a refinement turn."
    )
    excluded_catalog_ids: List[int] = Field(
        default_factory=list, description="Catalog ids already shown to the user."
    )
    explanation: str = ""
    sommelier_note: str = ""
    is_small_talk: bool = False
    conversation_reply: Optional[str] = None
    classifier: Literal["llm", "patterns", "refinement"] = "patterns"

    @field_validator("intensity", mode="before")
    @classmethod
    def _coerce_intensity(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().lower() in VALID_INTENSITIES:
            return value.strip().lower()
        return "medium"

    @field_validator("genres", "exclude_genres", "excluded_catalog_ids", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> List[int]:
        return _coerce_genre_ids(value)

    @field_validator("keywords", mode="before")
    @classmethod
    def _join_keywords(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ",".join(str(term).strip() for term in value if str(term).strip())
        return str(value).strip()

    @property
    def keyword_terms(self) -> List[str]:
        return [term.strip() for term in self.keywords.split(",") if term.strip()]

    def to_prompt_schema(self) -> Dict[str, Any]:
        """Render the camelCase JSON object the generative classifier returns."""
        return self.model_dump(include=set(PROMPT_SCHEMA_FIELDS), by_alias=True)
