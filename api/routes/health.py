from __future__ import annotations

from fastapi import APIRouter, Request

from api.core import llm_parser

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    return {
        "status": "ok",
        "catalog_configured": getattr(request.app.state, "tmdb_client", None)
        is not None,
        "classifier_configured": llm_parser.classifier_enabled(),
    }
