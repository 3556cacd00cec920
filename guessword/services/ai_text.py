from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from openai import OpenAI, OpenAIError

from .cache import DescriptionCache
from .text_requests import (
    DEFAULT_LANGUAGE,
    AnalyzeGuess,
    CheckDefinitionMatch,
    GenerateHint,
    GenerateMultilingualDescription,
    GenerateSampleSentence,
    GenerateWordDescription,
    TextRequest,
    build_messages,
    fallback_text,
)

logger = logging.getLogger(__name__)

ResponseSource = Literal["llm", "cache", "local"]

# These actions have no meaningful local answer: API failures are raised.
_STRICT_REQUESTS = (CheckDefinitionMatch, GenerateSampleSentence, GenerateMultilingualDescription)

# Soft cap on hint verbosity (in words).
_MAX_HINT_WORDS = 25


class OpenAIServiceError(RuntimeError):
    """Raised when a strict text-generation request cannot be served."""


@dataclass(frozen=True)
class TokenUsage:
    prompt: int = 0
    completion: int = 0
    total: int = 0


@dataclass(frozen=True)
class AIResponse:
    """Generated text plus where it came from."""
    content: str
    source: ResponseSource = "llm"
    token_usage: Optional[TokenUsage] = None


def _default_client() -> Optional[OpenAI]:
    """
    Build an OpenAI client from the environment, or None when offline.

    OFFLINE_MODE defaults to "true", so nothing leaves the machine unless the
    environment opts in and provides OPENAI_API_KEY.
    """
    api_key = os.getenv("OPENAI_API_KEY", "")
    offline = os.getenv("OFFLINE_MODE", "true").lower() == "true"
    if offline or not api_key:
        return None
    return OpenAI(api_key=api_key)


def _contains_answer(text: str, secret: str) -> bool:
    return secret.lower() in (text or "").lower()


def _description_language(request: TextRequest) -> Optional[str]:
    """Cache language for description requests; None for everything else."""
    if isinstance(request, GenerateWordDescription):
        return DEFAULT_LANGUAGE
    if isinstance(request, GenerateMultilingualDescription):
        return request.language
    return None


def _complete(client: OpenAI, request: TextRequest) -> AIResponse:
    """Run one chat completion for `request` (errors propagate)."""
    messages = build_messages(request)
    params = {
        "model": os.getenv("MODEL_NAME") or request.model,
        "messages": messages,
        "max_tokens": request.max_tokens,
    }
    if request.temperature is not None:
        params["temperature"] = request.temperature

    resp = client.chat.completions.create(**params)
    choice = resp.choices[0] if resp.choices else None
    text = ((choice.message.content if choice else None) or "").strip()

    usage = getattr(resp, "usage", None)
    token_usage = None
    if usage is not None:
        token_usage = TokenUsage(
            prompt=getattr(usage, "prompt_tokens", 0) or 0,
            completion=getattr(usage, "completion_tokens", 0) or 0,
            total=getattr(usage, "total_tokens", 0) or 0,
        )
    return AIResponse(content=text, source="llm", token_usage=token_usage)


def _post_process(request: TextRequest, response: AIResponse) -> AIResponse:
    """Replace empty or answer-leaking text with the local fallback."""
    text = response.content
    if not text:
        return AIResponse(content=fallback_text(request), source="local")
    if isinstance(request, GenerateHint):
        if _contains_answer(text, request.word):
            logger.info("Discarding generated hint that contains the answer")
            return AIResponse(content=fallback_text(request), source="local")
        words = text.split()
        if len(words) > _MAX_HINT_WORDS:
            text = " ".join(words[:_MAX_HINT_WORDS])
            return AIResponse(content=text, source=response.source, token_usage=response.token_usage)
    return response


def generate_text(
    request: TextRequest,
    client: Optional[OpenAI] = None,
    cache: Optional[DescriptionCache] = None,
) -> AIResponse:
    """
    Serve one text-generation request.

    Parameters
    ----------
    request : TextRequest
        One of the request dataclasses from `text_requests`.
    client : OpenAI | None
        Client to use. When omitted, one is built from the environment, and
        offline mode (the default) means no client at all.
    cache : DescriptionCache | None
        Consulted and filled for description requests only.

    Failure policy
    --------------
    - Offline: local fallback text, except CheckDefinitionMatch which cannot
      be judged locally and raises OpenAIServiceError.
    - API error on description/hint/analysis: logged, local fallback text.
    - API error on definition check, sample sentence or multilingual
      description: OpenAIServiceError.
    """
    language = _description_language(request)
    if cache is not None and language is not None:
        cached = cache.get(request.word, language)
        if cached is not None:
            return AIResponse(content=cached, source="cache")

    client = client or _default_client()
    if client is None:
        if isinstance(request, CheckDefinitionMatch):
            raise OpenAIServiceError("Failed to check definition: text generation is offline")
        return AIResponse(content=fallback_text(request), source="local")

    try:
        response = _complete(client, request)
    except OpenAIError as exc:
        action = type(request).__name__
        if isinstance(request, _STRICT_REQUESTS):
            raise OpenAIServiceError(f"{action} failed: {exc}") from exc
        logger.warning("%s failed, using local fallback", action, exc_info=True)
        return AIResponse(content=fallback_text(request), source="local")

    response = _post_process(request, response)
    if cache is not None and language is not None and response.source == "llm":
        cache.add(request.word, language, response.content)
    return response


def generate_word_description(
    word: str,
    language: str = DEFAULT_LANGUAGE,
    client: Optional[OpenAI] = None,
    cache: Optional[DescriptionCache] = None,
) -> str:
    """Description of `word` in `language`, served from `cache` when possible."""
    if language == DEFAULT_LANGUAGE:
        request: TextRequest = GenerateWordDescription(word=word)
    else:
        request = GenerateMultilingualDescription(word=word, language=language)
    return generate_text(request, client=client, cache=cache).content


def generate_hint(word: str, previous_guesses: Iterable[str] = (), client: Optional[OpenAI] = None) -> str:
    """One subtle hint that never contains `word` itself."""
    request = GenerateHint(word=word, previous_guesses=tuple(previous_guesses))
    return generate_text(request, client=client).content


def analyze_guess(word: str, player_guess: str, client: Optional[OpenAI] = None) -> str:
    return generate_text(AnalyzeGuess(word=word, player_guess=player_guess), client=client).content


def check_definition_match(word: str, definition: str, client: Optional[OpenAI] = None) -> bool:
    """True if the model judges `definition` to describe `word`."""
    response = generate_text(CheckDefinitionMatch(word=word, definition=definition), client=client)
    return "yes" in response.content.lower()


def generate_sample_sentence(word: str, client: Optional[OpenAI] = None) -> AIResponse:
    return generate_text(GenerateSampleSentence(word=word), client=client)


__all__ = [
    "AIResponse",
    "OpenAIServiceError",
    "TokenUsage",
    "analyze_guess",
    "check_definition_match",
    "generate_hint",
    "generate_sample_sentence",
    "generate_text",
    "generate_word_description",
]
