from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_INTENT_ENV = (
    "INTENT_PROVIDER",
    "INTENT_API_KEY",
    "FIREWORKS_API_KEY",
    "OPENAI_API_KEY",
    "INTENT_MODEL",
    "INTENT_ENDPOINT",
    "INTENT_ENABLED",
    "INTENT_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _no_llm_credentials(monkeypatch):
    """Keep the generative classifier off unless a test configures it."""
    from api.core import llm_parser

    get_settings = llm_parser._get_settings
    for key in _INTENT_ENV:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
