from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from openai import OpenAIError

from guessword.services.ai_text import (
    OpenAIServiceError,
    TokenUsage,
    analyze_guess,
    check_definition_match,
    generate_hint,
    generate_sample_sentence,
    generate_text,
    generate_word_description,
)
from guessword.services.cache import DescriptionCache
from guessword.services.text_requests import (
    AnalyzeGuess,
    CheckDefinitionMatch,
    GenerateHint,
    GenerateMultilingualDescription,
    GenerateSampleSentence,
    GenerateWordDescription,
    build_messages,
    fallback_text,
)


def _fake_client(text="A subtle clue.", usage=None):
    client = Mock()
    resp = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=usage,
    )
    client.chat.completions.create.return_value = resp
    return client


@pytest.fixture(autouse=True)
def offline_env(monkeypatch):
    monkeypatch.setenv("OFFLINE_MODE", "true")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("MODEL_NAME", raising=False)


# --- request variants ---

ALL_REQUESTS = [
    GenerateWordDescription(word="apple"),
    GenerateMultilingualDescription(word="apple", language="Swedish"),
    GenerateHint(word="apple", previous_guesses=("pear", "grape")),
    AnalyzeGuess(word="apple", player_guess="apply"),
    CheckDefinitionMatch(word="apple", definition="A fruit."),
    GenerateSampleSentence(word="apple"),
]


@pytest.mark.parametrize("request_", ALL_REQUESTS)
def test_every_variant_builds_messages(request_):
    messages = build_messages(request_)
    assert [m["role"] for m in messages] == ["system", "user"]
    assert "apple" in messages[1]["content"]
    assert fallback_text(request_)


def test_unknown_request_is_rejected():
    with pytest.raises(TypeError):
        build_messages("generateHint")
    with pytest.raises(TypeError):
        fallback_text(object())
    with pytest.raises(TypeError):
        generate_text(object(), client=_fake_client())


# --- offline mode ---

def test_offline_hint_is_local():
    hint = generate_hint("apple")
    assert "5 letters" in hint and "'A'" in hint


def test_offline_description_is_local_and_not_cached():
    cache = DescriptionCache()
    text = generate_word_description("apple", cache=cache)
    assert "apple" not in text.lower()
    assert cache.size() == 0


def test_offline_multilingual_description_hides_answer():
    cache = DescriptionCache()
    text = generate_word_description("apple", language="Swedish", cache=cache)
    assert "apple" not in text.lower()
    assert "5 letters" in text
    assert cache.size() == 0


def test_offline_definition_check_raises():
    with pytest.raises(OpenAIServiceError):
        check_definition_match("apple", "A fruit.")


def test_missing_key_counts_as_offline(monkeypatch):
    monkeypatch.setenv("OFFLINE_MODE", "false")
    assert generate_text(AnalyzeGuess(word="apple", player_guess="apply")).source == "local"


# --- with a client ---

def test_hint_uses_request_settings():
    client = _fake_client("Think of orchards.")
    assert generate_hint("apple", ["pear"], client=client) == "Think of orchards."
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4"
    assert kwargs["max_tokens"] == 100
    assert kwargs["temperature"] == 0.6
    assert "pear" in kwargs["messages"][1]["content"]


def test_model_name_env_override(monkeypatch):
    monkeypatch.setenv("MODEL_NAME", "gpt-4o-mini")
    client = _fake_client()
    analyze_guess("apple", "apply", client=client)
    assert client.chat.completions.create.call_args.kwargs["model"] == "gpt-4o-mini"


def test_sample_sentence_omits_temperature_and_reports_usage():
    usage = SimpleNamespace(prompt_tokens=10, completion_tokens=5, total_tokens=15)
    client = _fake_client("I ate an apple.", usage=usage)
    resp = generate_sample_sentence("apple", client=client)
    assert resp.content == "I ate an apple."
    assert resp.token_usage == TokenUsage(prompt=10, completion=5, total=15)
    assert "temperature" not in client.chat.completions.create.call_args.kwargs


def test_hint_leaking_answer_is_replaced():
    client = _fake_client("It's an Apple!")
    hint = generate_hint("apple", client=client)
    assert "apple" not in hint.lower()
    assert "5 letters" in hint


def test_long_hint_is_trimmed():
    client = _fake_client(" ".join(["word"] * 40))
    assert len(generate_hint("apple", client=client).split()) == 25


def test_empty_completion_falls_back():
    resp = generate_text(AnalyzeGuess(word="apple", player_guess="apply"), client=_fake_client(""))
    assert resp.source == "local"
    assert resp.content == "That's not quite right. Keep trying!"


def test_missing_choices_fall_back():
    client = _fake_client()
    client.chat.completions.create.return_value = SimpleNamespace(choices=[], usage=None)
    resp = generate_text(GenerateHint(word="apple"), client=client)
    assert resp.source == "local"
    assert "5 letters" in resp.content


@pytest.mark.parametrize("answer,expected", [("Yes.", True), ("yes", True), ("No", False)])
def test_check_definition_match(answer, expected):
    assert check_definition_match("apple", "A fruit.", client=_fake_client(answer)) is expected


# --- failures ---

def test_lenient_requests_fall_back_on_api_error():
    client = _fake_client()
    client.chat.completions.create.side_effect = OpenAIError("boom")
    assert "5 letters" in generate_hint("apple", client=client)
    assert analyze_guess("apple", "apply", client=client) == "That's not quite right. Keep trying!"


@pytest.mark.parametrize("request_", [
    CheckDefinitionMatch(word="apple", definition="A fruit."),
    GenerateSampleSentence(word="apple"),
    GenerateMultilingualDescription(word="apple", language="Swedish"),
])
def test_strict_requests_raise_on_api_error(request_):
    client = _fake_client()
    client.chat.completions.create.side_effect = OpenAIError("boom")
    with pytest.raises(OpenAIServiceError):
        generate_text(request_, client=client)


# --- description cache ---

def test_description_is_cached_per_language():
    cache = DescriptionCache()
    client = _fake_client("A crunchy fruit that grows on trees.")

    first = generate_text(GenerateWordDescription(word="apple"), client=client, cache=cache)
    second = generate_text(GenerateWordDescription(word="Apple"), client=client, cache=cache)

    assert first.source == "llm" and second.source == "cache"
    assert second.content == first.content
    assert client.chat.completions.create.call_count == 1

    generate_word_description("apple", language="Swedish", client=client, cache=cache)
    assert client.chat.completions.create.call_count == 2
    assert "Swedish" in client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
    assert cache.size() == 2


def test_non_description_requests_skip_cache():
    cache = DescriptionCache()
    client = _fake_client("Think of orchards.")
    generate_text(GenerateHint(word="apple"), client=client, cache=cache)
    generate_text(GenerateHint(word="apple"), client=client, cache=cache)
    assert client.chat.completions.create.call_count == 2
    assert cache.size() == 0
