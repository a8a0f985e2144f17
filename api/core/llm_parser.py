import json
import logging
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Sequence

import httpx

from .errors import ClassifierUnavailableError
from .mood_intent import MoodIntent
from .mood_patterns import (
    DEFAULT_PATTERN,
    classify_with_patterns,
    explanation_for,
    sommelier_note_for,
)
from .outcome import capture
from .prompts import load_prompt_template

logger = logging.getLogger(__name__)

PROMPT_NAME = "mood_classifier"

# Generation parameters for the two kinds of call.
CLASSIFY_PARAMS: Dict[str, Any] = {
    "temperature": 0.3,
    "top_p": 0.9,
    "max_tokens": 600,
    "presence_penalty": 0.0,
    "frequency_penalty": 0.1,
}
SMALL_TALK_PARAMS: Dict[str, Any] = {
    "temperature": 0.8,
    "top_p": 0.95,
    "max_tokens": 120,
    "presence_penalty": 0.3,
    "frequency_penalty": 0.3,
}

_GREETINGS = (
    "hi",
    "hello",
    "hey",
    "yo",
    "hiya",
    "howdy",
    "good morning",
    "good afternoon",
    "good evening",
    "how are you",
    "how's it going",
    "what's up",
    "whats up",
    "who are you",
    "what are you",
    "what can you do",
    "what is your name",
    "what's your name",
    "tell me about yourself",
    "thanks",
    "thank you",
)
_QUESTION_WORDS = (
    "what",
    "who",
    "why",
    "how",
    "when",
    "where",
    "which",
    "can",
    "could",
    "do",
    "does",
    "is",
    "are",
    "will",
    "would",
)
_MOVIE_TERMS = frozenset(
    {
        "movie",
        "movies",
        "film",
        "films",
        "watch",
        "watching",
        "cinema",
        "recommend",
        "recommendation",
        "recommendations",
        "suggest",
        "suggestion",
        "genre",
        "actor",
        "actress",
        "director",
        "comedy",
        "drama",
        "horror",
        "thriller",
        "romance",
        "documentary",
        "animation",
        "action",
        "sci-fi",
        "mood",
    }
)

_GREETING_PATTERN = re.compile(
    r"^(?:" + "|".join(re.escape(g) for g in _GREETINGS) + r")\b"
)
_QUESTION_PATTERN = re.compile(
    r"^(?:" + "|".join(re.escape(q) for q in _QUESTION_WORDS) + r")\b"
)
_CODE_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass(frozen=True)
class IntentParserSettings:
    provider: str
    api_key: str | None
    model: str
    endpoint: str
    enabled: bool
    timeout: float


@lru_cache(maxsize=1)
def _get_settings() -> IntentParserSettings:
    raw_provider = os.getenv("INTENT_PROVIDER", "fireworks").strip().lower()
    if raw_provider not in {"fireworks", "openai"}:
        logger.warning(
            "Unsupported INTENT_PROVIDER '%s'; falling back to 'fireworks'.",
            raw_provider,
        )
        provider = "fireworks"
    else:
        provider = raw_provider

    if provider == "openai":
        api_key = os.getenv("INTENT_API_KEY") or os.getenv("OPENAI_API_KEY")
        default_model = "gpt-4o-mini"
        default_endpoint = "https://api.openai.com/v1/chat/completions"
    else:
        api_key = os.getenv("INTENT_API_KEY") or os.getenv("FIREWORKS_API_KEY")
        default_model = "accounts/fireworks/models/llama-v3p1-8b-instruct"
        default_endpoint = "https://api.fireworks.ai/inference/v1/chat/completions"

    model = os.getenv("INTENT_MODEL", default_model)
    endpoint = os.getenv("INTENT_ENDPOINT", default_endpoint)
    enabled_value = os.getenv("INTENT_ENABLED", "1").strip().lower()
    enabled = bool(api_key) and enabled_value not in {"0", "false", "no"}
    timeout = 12.0
    raw_timeout = os.getenv("INTENT_TIMEOUT")
    if raw_timeout:
        try:
            timeout = max(1.0, float(raw_timeout))
        except ValueError:
            logger.warning(
                "Invalid INTENT_TIMEOUT value '%s'; using default.", raw_timeout
            )
    return IntentParserSettings(
        provider=provider,
        api_key=api_key,
        model=model,
        endpoint=endpoint,
        enabled=enabled,
        timeout=timeout,
    )


def looks_like_small_talk(mood_text: str) -> bool:
    """
    Cheap conversational check run before spending a full classification call.
    Order matters: short inputs and greetings are small talk even when they
    mention films.
    """
    text = " ".join((mood_text or "").lower().split())
    words = text.split()
    if len(words) <= 3:
        return True
    if _GREETING_PATTERN.match(text):
        return True
    tokens = {word.strip(".,!?;:'\"()") for word in words}
    if tokens & _MOVIE_TERMS:
        return False
    if _QUESTION_PATTERN.match(text):
        return True
    return False


def _indicates_stress(mood_text: str, markers: Sequence[str]) -> bool:
    lowered = (mood_text or "").lower()
    return any(marker in lowered for marker in markers)


def build_classification_messages(mood_text: str) -> List[Dict[str, str]]:
    config = load_prompt_template(PROMPT_NAME)
    cheat_sheet = "\n".join(f"- {line}" for line in config.get("cheat_sheet", []))
    sections = [config.get("system_prompt", "")]
    if cheat_sheet:
        sections.append(f"Emotion cheat-sheet:\n{cheat_sheet}")
    if config.get("styling"):
        sections.append(config["styling"])

    messages = [{"role": "system", "content": "\n\n".join(s for s in sections if s)}]
    example = config.get("stress_example")
    if example and _indicates_stress(mood_text, config.get("stress_markers", [])):
        messages.append({"role": "user", "content": example["input"]})
        messages.append(
            {"role": "assistant", "content": json.dumps(example["output"])}
        )
    messages.append({"role": "user", "content": mood_text})
    return messages


def build_small_talk_messages(mood_text: str) -> List[Dict[str, str]]:
    config = load_prompt_template(PROMPT_NAME)
    return [
        {"role": "system", "content": config.get("small_talk_prompt", "")},
        {"role": "user", "content": mood_text},
    ]


async def _generate(
    settings: IntentParserSettings,
    messages: List[Dict[str, str]],
    params: Dict[str, Any],
) -> str:
    if not settings.api_key:
        raise ClassifierUnavailableError("Missing API key for intent classifier.")

    headers = {
        "Authorization": f"Bearer {settings.api_key}",
        "Content-Type": "application/json",
    }
    body = {"model": settings.model, "messages": messages, **params}

    try:
        async with httpx.AsyncClient(timeout=settings.timeout) as client:
            response = await client.post(settings.endpoint, headers=headers, json=body)
    except httpx.HTTPError as exc:
        raise ClassifierUnavailableError(
            f"{settings.provider} request failed: {exc}"
        ) from exc

    if response.status_code >= 400:
        raise ClassifierUnavailableError(
            f"{settings.provider} API responded with status {response.status_code}"
        )

    try:
        content = response.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise ClassifierUnavailableError(
            "Unexpected response structure from intent classifier."
        ) from exc
    if not isinstance(content, str):
        raise ClassifierUnavailableError("Intent classifier returned non-text content.")
    return content


def _small_talk_intent(reply: str, previous_ids: Sequence[int] | None) -> MoodIntent:
    return MoodIntent(
        primary_emotion="neutral",
        desired_outcome=DEFAULT_PATTERN.outcome,
        genres=list(DEFAULT_PATTERN.genres),
        keywords=DEFAULT_PATTERN.keywords,
        excluded_catalog_ids=list(previous_ids or []),
        explanation=explanation_for("general", DEFAULT_PATTERN.outcome),
        sommelier_note=sommelier_note_for("general"),
        is_small_talk=True,
        conversation_reply=reply,
        classifier="llm",
    )


def _strip_code_fences(text: str) -> str:
    return _CODE_FENCE_PATTERN.sub("", text).strip()


def _patch_defaults(intent: MoodIntent, previous_ids: Sequence[int] | None) -> MoodIntent:
    emotion = intent.primary_emotion.strip().lower() or "general"
    outcome = intent.desired_outcome.strip() or DEFAULT_PATTERN.outcome
    updates: Dict[str, Any] = {
        "primary_emotion": emotion,
        "desired_outcome": outcome,
        "classifier": "llm",
    }
    if not intent.genres:
        updates["genres"] = list(DEFAULT_PATTERN.genres)
    if not intent.keyword_terms:
        updates["keywords"] = DEFAULT_PATTERN.keywords
    if not intent.explanation.strip():
        updates["explanation"] = explanation_for(emotion, outcome)
    if not intent.sommelier_note.strip():
        updates["sommelier_note"] = sommelier_note_for(emotion)
    if previous_ids and not intent.excluded_catalog_ids:
        updates["excluded_catalog_ids"] = list(previous_ids)
    if intent.is_small_talk and not (intent.conversation_reply or "").strip():
        updates["is_small_talk"] = False
        updates["conversation_reply"] = None
    return intent.model_copy(update=updates)


def parse_llm_response(
    raw_text: str, previous_ids: Sequence[int] | None = None
) -> MoodIntent:
    """
    Decode the classifier's reply into a MoodIntent. Text that holds no JSON
    object is passed through as a conversational reply.
    """
    cleaned = _strip_code_fences(raw_text or "")
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    payload: Any = None
    if start != -1 and end > start:
        try:
            payload = json.loads(cleaned[start : end + 1])
        except json.JSONDecodeError:
            payload = None

    if not isinstance(payload, dict):
        reply = (raw_text or "").strip()
        if not reply:
            raise ClassifierUnavailableError("Intent classifier returned empty text.")
        logger.info("Intent classifier reply was not JSON; treating it as small talk.")
        return _small_talk_intent(reply, previous_ids)

    intent = MoodIntent.model_validate(payload)
    return _patch_defaults(intent, previous_ids)


async def _classify_with_llm(
    settings: IntentParserSettings,
    mood_text: str,
    previous_ids: Sequence[int] | None,
) -> MoodIntent:
    if looks_like_small_talk(mood_text):
        reply = await _generate(
            settings, build_small_talk_messages(mood_text), SMALL_TALK_PARAMS
        )
        reply = reply.strip()
        if not reply:
            raise ClassifierUnavailableError("Small talk reply was empty.")
        return _small_talk_intent(reply, previous_ids)

    raw = await _generate(
        settings, build_classification_messages(mood_text), CLASSIFY_PARAMS
    )
    logger.debug("LLM intent raw payload: %s", raw)
    return parse_llm_response(raw, previous_ids)


async def classify_mood(
    mood_text: str, previous_ids: Sequence[int] | None = None
) -> MoodIntent:
    """
    Classify mood text with the generative provider when one is configured,
    otherwise (or on any failure) with the deterministic pattern classifier.
    """
    text = (mood_text or "").strip()
    settings = _get_settings()
    if not settings.enabled:
        logger.info(
            "Intent classifier disabled (no API key or INTENT_ENABLED=0); using pattern classifier for '%s'.",
            text,
        )
        return classify_with_patterns(text, previous_ids)

    logger.info("Intent classifier(%s) classifying mood '%s'.", settings.provider, text)
    try:
        outcome = await capture(
            _classify_with_llm(settings, text, previous_ids), stage="intent classifier"
        )
    except Exception:
        logger.exception("LLM intent classifier crashed; falling back to patterns.")
        return classify_with_patterns(text, previous_ids)

    if outcome.ok and outcome.value is not None:
        return outcome.value

    logger.warning(
        "LLM intent classifier unavailable; falling back to pattern classifier. error=%s",
        outcome.error,
    )
    return classify_with_patterns(text, previous_ids)


def classifier_enabled() -> bool:
    return _get_settings().enabled
