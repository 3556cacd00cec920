from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from .state import TargetWord

logger = logging.getLogger(__name__)

# Bundled dataset (id, word, definition, difficulty, category per record).
_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "words.json"

ALL = "all"


def _to_word(record: Dict[str, Any]) -> Optional[TargetWord]:
    """Build a TargetWord from one JSON record; None if the record is unusable."""
    try:
        return TargetWord(
            id=str(record["id"]),
            word=record["word"],
            definition=record.get("definition", ""),
            difficulty=record.get("difficulty", "medium"),
            category=record.get("category"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Skipping malformed word record %r: %s", record, exc)
        return None


def load_words(path: Path | str | None = None) -> List[TargetWord]:
    """
    Load the word dataset.

    Parameters
    ----------
    path : Path | str | None
        JSON file holding a list of word records. Defaults to the bundled
        `guessword/data/words.json`.

    Notes
    -----
    - Raises FileNotFoundError if the file does not exist.
    - Malformed records are skipped (and logged), the rest are kept in order.
    """
    p = Path(path) if path is not None else _DATA_FILE
    if not p.exists():
        raise FileNotFoundError(p)
    records = json.loads(p.read_text(encoding="utf-8"))
    words = [w for w in (_to_word(r) for r in records) if w is not None]
    logger.debug("Loaded %d words from %s", len(words), p)
    return words


def get_words_by_difficulty(difficulty: str = ALL, words: Optional[List[TargetWord]] = None) -> List[TargetWord]:
    """Return the words of one difficulty, or every word for "all"."""
    pool = load_words() if words is None else words
    key = (difficulty or ALL).strip().lower()
    if key == ALL:
        return list(pool)
    return [w for w in pool if w.difficulty == key]


def get_words_by_category(category: str, words: Optional[List[TargetWord]] = None) -> List[TargetWord]:
    """Return the words tagged with `category` (exact, case-insensitive)."""
    pool = load_words() if words is None else words
    key = (category or "").strip().lower()
    return [w for w in pool if (w.category or "").lower() == key]


def pick_random_word(
    difficulty: str = ALL,
    seed: int | None = None,
    words: Optional[List[TargetWord]] = None,
) -> TargetWord:
    """
    Pick a single word for the given difficulty.

    Fallback strategy
    -----------------
    1) Filter by `difficulty` ("all" keeps everything).
    2) If nothing matches (unknown difficulty), pick from the whole dataset.
    3) If the dataset itself is empty, raise ValueError.

    `seed` makes the pick reproducible for tests and demos.
    """
    pool = load_words() if words is None else words
    candidates = get_words_by_difficulty(difficulty, pool) or list(pool)
    if not candidates:
        raise ValueError("The word dataset is empty.")
    rng = random.Random(seed)
    return rng.choice(candidates)
