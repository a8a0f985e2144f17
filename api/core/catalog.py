from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CatalogItem(BaseModel):
    """
    A movie as returned by TMDB's discover/search endpoints. Fields the pipeline
    doesn't use are carried through untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    title: str = ""
    overview: str = ""
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: float = 0.0
    vote_count: int = 0
    genre_ids: List[int] = Field(default_factory=list)
    runtime: Optional[int] = None


class AnnotatedCatalogItem(CatalogItem):
    ai_context: str = Field("", alias="aiContext")

    model_config = ConfigDict(extra="allow", populate_by_name=True)
