"""
Requests understood by the text-generation service.

Each action is its own frozen dataclass; `TextRequest` is the closed union of
all of them. `build_messages` and `fallback_text` check every variant with
`isinstance` and raise TypeError for anything else, so adding a variant
means updating both functions.

Per-variant generation settings (model, max_tokens, temperature) live on the
classes as ClassVars; MODEL_NAME in the environment overrides the model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Tuple, Union

Message = Dict[str, str]

DEFAULT_LANGUAGE = "English"


@dataclass(frozen=True)
class GenerateWordDescription:
    word: str

    model: ClassVar[str] = "gpt-4"
    max_tokens: ClassVar[int] = 150
    temperature: ClassVar[Optional[float]] = 0.7


@dataclass(frozen=True)
class GenerateMultilingualDescription:
    word: str
    language: str

    model: ClassVar[str] = "gpt-4o"
    max_tokens: ClassVar[int] = 150
    temperature: ClassVar[Optional[float]] = 0.7


@dataclass(frozen=True)
class GenerateHint:
    word: str
    previous_guesses: Tuple[str, ...] = ()

    model: ClassVar[str] = "gpt-4"
    max_tokens: ClassVar[int] = 100
    temperature: ClassVar[Optional[float]] = 0.6


@dataclass(frozen=True)
class AnalyzeGuess:
    word: str
    player_guess: str

    model: ClassVar[str] = "gpt-4"
    max_tokens: ClassVar[int] = 100
    temperature: ClassVar[Optional[float]] = 0.5


@dataclass(frozen=True)
class CheckDefinitionMatch:
    word: str
    definition: str

    model: ClassVar[str] = "gpt-4o"
    max_tokens: ClassVar[int] = 10
    temperature: ClassVar[Optional[float]] = 0.3


@dataclass(frozen=True)
class GenerateSampleSentence:
    word: str

    model: ClassVar[str] = "gpt-4o"
    max_tokens: ClassVar[int] = 100
    temperature: ClassVar[Optional[float]] = None  # API default


TextRequest = Union[
    GenerateWordDescription,
    GenerateMultilingualDescription,
    GenerateHint,
    AnalyzeGuess,
    CheckDefinitionMatch,
    GenerateSampleSentence,
]


def _unsupported(request: object) -> TypeError:
    return TypeError(f"Unsupported text request: {type(request).__name__}")


def build_messages(request: TextRequest) -> List[Message]:
    """Chat messages (system + user) for one request."""
    if isinstance(request, GenerateWordDescription):
        system = (
            "You are a helpful assistant that generates concise, informative, and engaging "
            "descriptions for words in a word-guessing game. The descriptions should provide "
            "clues without making the answer too obvious."
        )
        user = (
            f'Generate a brief description (2-3 sentences) for the word "{request.word}" that '
            "could be used in a word-guessing game. The description should give hints about "
            "the word without explicitly stating it."
        )
    elif isinstance(request, GenerateMultilingualDescription):
        system = (
            "You are a helpful assistant that generates concise, informative descriptions for "
            f"words in {request.language}. The descriptions should be natural and idiomatic "
            "in the target language."
        )
        user = (
            f"Generate a brief description (2-3 sentences) in {request.language} for the word "
            f'"{request.word}". The description should give hints about the word without '
            "explicitly stating it."
        )
    elif isinstance(request, GenerateHint):
        system = (
            "You are an assistant for a word-guessing game. You provide helpful hints without "
            "giving away the answer completely."
        )
        guesses = ", ".join(request.previous_guesses) or "none yet"
        user = (
            f'The word is "{request.word}". The player has made these guesses: {guesses}. '
            "Give a subtle hint that helps them get closer to the answer without making it "
            "too obvious. Do NOT include the word itself."
        )
    elif isinstance(request, AnalyzeGuess):
        system = (
            "You are an assistant for a word-guessing game. You provide feedback on a "
            "player's guess compared to the correct word."
        )
        user = (
            f'The correct word is "{request.word}" and the player guessed '
            f'"{request.player_guess}". Provide brief feedback (1-2 sentences) on how close '
            "they are, without revealing the answer."
        )
    elif isinstance(request, CheckDefinitionMatch):
        system = (
            "You are a judge for a word guessing game. Your task is to determine if a "
            "definition accurately describes a word."
        )
        user = (
            f"Word: {request.word}\nDefinition: {request.definition}\n\n"
            "Does this definition accurately describe the word? Answer only with 'yes' or 'no'."
        )
    elif isinstance(request, GenerateSampleSentence):
        system = (
            "You are a helpful assistant for a word learning game. Your task is to create "
            "natural, useful example sentences."
        )
        user = (
            f'Generate a sample sentence using the word "{request.word}". The sentence should '
            "be natural, demonstrate proper usage, and help understand the word's meaning."
        )
    else:
        raise _unsupported(request)

    return [{"role": "system", "content": system}, {"role": "user", "content": user}]


def fallback_text(request: TextRequest) -> str:
    """Deterministic local text used offline or when the API gives nothing back."""
    if isinstance(request, GenerateWordDescription):
        return f"A word with {len(request.word)} letters. Read the definition closely!"
    if isinstance(request, GenerateMultilingualDescription):
        return f"A word with {len(request.word)} letters (no {request.language} description available offline)."
    if isinstance(request, GenerateHint):
        return f"The word has {len(request.word)} letters and starts with '{request.word[:1].upper()}'."
    if isinstance(request, AnalyzeGuess):
        return "That's not quite right. Keep trying!"
    if isinstance(request, CheckDefinitionMatch):
        return "no"
    if isinstance(request, GenerateSampleSentence):
        return "No example generated"
    raise _unsupported(request)
