from __future__ import annotations

import logging
import os

import streamlit as st

from dotenv import load_dotenv
load_dotenv(override=False)  # Load .env into process env

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# --- Core game imports ---
from guessword.core.state import GuessResult, TargetWord
from guessword.core.validation import validate_guess
from guessword.core.wordlist import pick_random_word

# --- Generative AI services ---
from guessword.services.ai_text import generate_hint, generate_word_description
from guessword.services.cache import DescriptionCache

logger = logging.getLogger("guesstheword")

LANGUAGES = ["English", "Swedish"]
DIFFICULTIES = ["all", "easy", "medium", "hard"]

_EMPTY_STATS = {"score": 0, "guessed": 0, "skipped": 0, "streak": 0, "longest_streak": 0}


# =======================================
# Session-state helpers & round management
# =======================================

def _init_stats() -> None:
    """Ensure a stats dict exists in session state."""
    st.session_state.setdefault("stats", dict(_EMPTY_STATS))


def _description_cache() -> DescriptionCache:
    """One description cache per browser session."""
    if "description_cache" not in st.session_state:
        ttl = float(os.getenv("DESCRIPTION_CACHE_TTL_MINUTES", "30"))
        st.session_state["description_cache"] = DescriptionCache(ttl_minutes=ttl)
    return st.session_state["description_cache"]


def _start_new_round(difficulty: str) -> None:
    """Pick a fresh word and reset per-round keys."""
    st.session_state["word"] = pick_random_word(difficulty)
    st.session_state["feedback"] = None
    st.session_state["guesses"] = []
    st.session_state["ai_hint"] = None
    st.session_state["ai_description"] = None


def _ensure_round(difficulty: str) -> TargetWord:
    """Ensure there is a current word in session state; pick one if missing."""
    if not isinstance(st.session_state.get("word"), TargetWord):
        _start_new_round(difficulty)
    _init_stats()
    return st.session_state["word"]


def _record_result(result: GuessResult) -> None:
    """Update score and streaks from one validated guess."""
    stats = st.session_state["stats"]
    if result.is_correct:
        stats["score"] += 1
        stats["guessed"] += 1
        stats["streak"] += 1
        stats["longest_streak"] = max(stats["longest_streak"], stats["streak"])


def _skip(difficulty: str) -> None:
    stats = st.session_state["stats"]
    stats["skipped"] += 1
    stats["streak"] = 0
    _start_new_round(difficulty)


def _render_feedback(result: GuessResult) -> None:
    """Green for correct answers; the hint tier picks the colour otherwise."""
    if result.is_correct:
        st.success(result.message)
    elif result.hint_level == "strong":
        st.warning(result.message)
    elif result.hint_level == "mild":
        st.info(result.message)
    else:
        st.error(result.message)


# =========
# The App
# =========

def main() -> None:
    st.set_page_config(page_title="Guess the Word", page_icon="📖", layout="centered")
    st.title("📖 Guess the Word")

    # ---- Sidebar ----
    with st.sidebar:
        st.header("Settings")
        difficulty = st.selectbox("Difficulty", DIFFICULTIES, index=0)
        language = st.selectbox("Description language", LANGUAGES, index=0)
        if st.button("🔁 New Word", use_container_width=True):
            _start_new_round(difficulty)
            st.rerun()

        _init_stats()
        with st.expander("📊 Stats", expanded=True):
            s = st.session_state["stats"]
            st.metric("Score", s["score"])
            c1, c2 = st.columns(2); c1.metric("Guessed", s["guessed"]); c2.metric("Skipped", s["skipped"])
            c3, c4 = st.columns(2); c3.metric("Streak", s["streak"]); c4.metric("Longest", s["longest_streak"])

            if st.button("♻️ Reset stats"):
                st.session_state["stats"] = dict(_EMPTY_STATS)
                st.success("Stats reset.")

        with st.expander("Debug (env)"):
            st.write("OFFLINE_MODE:", os.getenv("OFFLINE_MODE"))
            st.write("Has OPENAI_API_KEY:", bool(os.getenv("OPENAI_API_KEY")))
            st.write("MODEL_NAME:", os.getenv("MODEL_NAME"))
            st.write("Cached descriptions:", _description_cache().size())

    word: TargetWord = _ensure_round(difficulty)

    # ---- Definition ----
    st.subheader("Definition")
    st.markdown(f"> {word.definition}")
    st.caption(f"Difficulty: {word.difficulty} · Category: {word.category or 'general'}")

    # ---- Hints & description ----
    with st.expander("Need more help?"):
        c1, c2 = st.columns(2)
        with c1:
            if st.button("📝 AI Description"):
                with st.spinner("Writing a description..."):
                    st.session_state["ai_description"] = generate_word_description(
                        word.word, language=language, cache=_description_cache()
                    )
                st.rerun()
        with c2:
            if st.button("✨ AI Hint"):
                with st.spinner("Thinking..."):
                    st.session_state["ai_hint"] = generate_hint(word.word, st.session_state["guesses"])
                st.rerun()

        if st.session_state["ai_description"]:
            st.info(st.session_state["ai_description"])
        if st.session_state["ai_hint"]:
            st.info(st.session_state["ai_hint"])

    # ---- Guess input ----
    st.subheader("Your guess")
    with st.form("guess_form", clear_on_submit=True):
        guess_inp = st.text_input("Which word matches the definition?")
        submitted = st.form_submit_button("Submit Guess")
        solved = getattr(st.session_state.get("feedback"), "is_correct", False)
        if submitted and not solved:
            result = validate_guess(guess_inp, word)
            logger.debug("Guess %r for word %s -> %s", guess_inp, word.id, result.as_dict())
            st.session_state["feedback"] = result
            if guess_inp and guess_inp.strip():
                st.session_state["guesses"].append(guess_inp.strip())
            _record_result(result)
            st.rerun()

    result = st.session_state.get("feedback")
    if result is not None:
        _render_feedback(result)
        if result.is_correct:
            st.button("Next word", on_click=_start_new_round, args=(difficulty,))

    if result is None or not result.is_correct:
        st.button("⏭️ Skip", on_click=_skip, args=(difficulty,))

    st.divider()
    st.caption(
        "Guesses are checked locally with typo tolerance; Generative AI only writes "
        "optional descriptions and hints."
    )


if __name__ == "__main__":
    main()
