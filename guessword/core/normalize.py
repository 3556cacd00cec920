from __future__ import annotations

import re
from typing import Optional

# Anything that is neither an ASCII word character nor whitespace.
SPECIAL_CHARS = re.compile(r"[^\w\s]", re.ASCII)


def sanitize_input(
    text: Optional[str],
    remove_special_chars: bool = False,
    max_length: Optional[int] = None,
) -> str:
    """
    Return a cleaned copy of raw user text.

    Parameters
    ----------
    text : str | None
        Raw input as typed by the player. `None` is treated as "".
    remove_special_chars : bool
        Drop every character that is not an ASCII letter, digit, underscore
        or whitespace (accented letters are dropped too).
    max_length : int | None
        Truncate the result to at most this many characters.

    Returns
    -------
    str
        The trimmed (and optionally filtered/truncated) text. Never raises.
    """
    cleaned = (text or "").strip()
    if remove_special_chars:
        cleaned = SPECIAL_CHARS.sub("", cleaned)
    if max_length is not None:
        cleaned = cleaned[: max(0, max_length)]
    return cleaned
