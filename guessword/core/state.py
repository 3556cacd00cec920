from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional


Difficulty = Literal["easy", "medium", "hard"]
HintLevel = Literal["none", "mild", "strong"]

DIFFICULTIES = ("easy", "medium", "hard")

# Ordered from "reveals nothing" to "reveals the most about the target".
HINT_LEVELS = ("none", "mild", "strong")


@dataclass(frozen=True)
class TargetWord:
    """
    Immutable word record supplied by the word dataset.

    Notes
    -----
    - The guess engine only reads `word`; `definition`, `difficulty` and
      `category` are there for the play surface and the dataset filters.
    - `word` keeps its original casing; comparisons are case-insensitive.
    """

    id: str
    word: str
    definition: str
    difficulty: Difficulty = "medium"
    category: Optional[str] = None

    def __post_init__(self) -> None:
        """
        Normalize and validate fields.

        Normalization
        -------------
        - `id`, `word` and `definition` are stripped of surrounding whitespace.
        - `difficulty` is lowercased.

        Validation
        ----------
        - `word` must be non-empty.
        - `difficulty` must be one of {"easy", "medium", "hard"}.
        """
        word = (self.word or "").strip()
        if not word:
            raise ValueError("`word` must be a non-empty string.")
        object.__setattr__(self, "word", word)
        object.__setattr__(self, "id", str(self.id).strip())
        object.__setattr__(self, "definition", (self.definition or "").strip())

        difficulty = (self.difficulty or "").strip().lower()
        if difficulty not in DIFFICULTIES:
            raise ValueError("`difficulty` must be one of {'easy', 'medium', 'hard'}.")
        object.__setattr__(self, "difficulty", difficulty)


@dataclass(frozen=True)
class GuessResult:
    """
    Outcome of validating one guess against one target word.

    `hint_level` says how much structure of the target the message gives away:
    "none" < "mild" (letter count) < "strong" (first and last letter).
    """

    is_correct: bool
    message: str
    hint_level: HintLevel = "none"

    def __post_init__(self) -> None:
        if self.hint_level not in HINT_LEVELS:
            raise ValueError("`hint_level` must be one of {'none', 'mild', 'strong'}.")
        if self.is_correct and self.hint_level != "none":
            raise ValueError("A correct guess cannot carry a hint.")

    def as_dict(self) -> Dict[str, Any]:
        """Plain mapping for UI code and logging."""
        return asdict(self)
