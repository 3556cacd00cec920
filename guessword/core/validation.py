from __future__ import annotations

import re
from typing import Optional

from .matching import is_fuzzy_match
from .normalize import SPECIAL_CHARS, sanitize_input
from .state import GuessResult, TargetWord

MAX_GUESS_LENGTH = 50

_DIGITS_ONLY = re.compile(r"^\d+$", re.ASCII)


def check_guess(guess: Optional[str], target_word: Optional[TargetWord]) -> bool:
    """
    Strict check: True only if the trimmed guess equals the target word,
    ignoring case. Missing inputs are never correct.
    """
    if not guess or target_word is None:
        return False
    return guess.strip().lower() == target_word.word.lower()


def _length_hint(guess: str, target: str) -> GuessResult:
    """Mild hint: reveal only how many letters the target has."""
    direction = "short" if len(guess) < len(target) else "long"
    return GuessResult(
        is_correct=False,
        message=f"Your guess is too {direction}. The answer is a {len(target)}-letter word.",
        hint_level="mild",
    )


def _letters_hint(target: str) -> GuessResult:
    """Strong hint: reveal the first and last letter of the target."""
    return GuessResult(
        is_correct=False,
        message=(
            f'Not quite! The word starts with "{target[0].upper()}" '
            f'and ends with "{target[-1].upper()}".'
        ),
        hint_level="strong",
    )


def validate_guess(raw_guess: Optional[str], target_word: Optional[TargetWord]) -> GuessResult:
    """
    Classify one guess against the target word and build player feedback.

    Stages (the first one that applies decides the result)
    ------------------------------------------------------
    1) Missing guess or target              -> "Please enter a valid guess."
    2) Blank after trimming                 -> "Please enter a word."
    3) Raw input longer than 50 chars       -> too long
    4) Digits only                          -> not just numbers
    5) Anything but letters/digits/spaces   -> special characters
    6) Exact match (case-insensitive)       -> correct
    7) Accepted near miss                   -> correct, "Almost!" + the spelling
    8) Different length                     -> mild hint (letter count)
    9) Same length, too far off             -> strong hint (first/last letter)

    Notes
    -----
    - Never raises: every input, however malformed, maps to a GuessResult.
    - The length limit in stage 3 applies to the raw text, so padding a short
      word with 50 spaces is still rejected.
    - Stage 7 applies to guesses of any length: a dropped or doubled letter
      ("exampl", "examplee") is accepted like any other single typo.
    """
    if raw_guess is None or target_word is None:
        return GuessResult(False, "Please enter a valid guess.")

    guess = sanitize_input(raw_guess)
    if not guess:
        return GuessResult(False, "Please enter a word.")

    if len(raw_guess) > MAX_GUESS_LENGTH:
        return GuessResult(
            False,
            f"Your guess is too long. Please keep it under {MAX_GUESS_LENGTH} characters.",
        )

    if _DIGITS_ONLY.match(guess):
        return GuessResult(False, "Please enter a word, not just numbers.")

    if SPECIAL_CHARS.search(guess):
        return GuessResult(
            False,
            "Your guess contains special characters. Please use letters only.",
        )

    target = target_word.word
    if guess.lower() == target.lower():
        return GuessResult(True, "Correct! Well done!")

    if is_fuzzy_match(guess, target):
        return GuessResult(
            True,
            f'Almost! The correct spelling is "{target}", but we\'ll count that as correct!',
        )

    if len(guess) != len(target):
        return _length_hint(guess, target)

    return _letters_hint(target)
