import json
from pathlib import Path

import pytest
from guessword.core.state import TargetWord
from guessword.core.wordlist import (
    get_words_by_category,
    get_words_by_difficulty,
    load_words,
    pick_random_word,
)


def test_bundled_dataset_loads():
    words = load_words()
    assert len(words) > 50
    assert all(isinstance(w, TargetWord) for w in words)
    assert len({w.word for w in words}) == len(words)  # no duplicate answers


@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_filter_by_difficulty(difficulty):
    words = get_words_by_difficulty(difficulty)
    assert words
    assert all(w.difficulty == difficulty for w in words)


def test_all_and_case_insensitive_difficulty():
    assert len(get_words_by_difficulty("all")) == len(load_words())
    assert get_words_by_difficulty(" EASY ") == get_words_by_difficulty("easy")


def test_filter_by_category():
    animals = get_words_by_category("animals")
    assert "dog" in {w.word for w in animals}
    assert all(w.category == "animals" for w in animals)
    assert get_words_by_category("no-such-category") == []


def test_pick_random_word_is_reproducible_with_seed():
    a = pick_random_word("hard", seed=7)
    b = pick_random_word("hard", seed=7)
    assert a == b
    assert a.difficulty == "hard"


def test_unknown_difficulty_falls_back_to_everything():
    pool = [TargetWord(id="1", word="apple", definition="A fruit.", difficulty="easy")]
    assert pick_random_word("legendary", words=pool).word == "apple"


def test_empty_pool_raises():
    with pytest.raises(ValueError):
        pick_random_word(words=[])


def test_load_words_skips_malformed_records(tmp_path: Path):
    p = tmp_path / "words.json"
    p.write_text(json.dumps([
        {"id": "1", "word": "apple", "definition": "A fruit.", "difficulty": "easy"},
        {"id": "2", "definition": "no word field"},
        {"id": "3", "word": "tree", "definition": "A plant.", "difficulty": "impossible"},
        {"id": "4", "word": "moon", "definition": "Earth's satellite.", "difficulty": "easy",
         "category": "astronomy"},
    ]), encoding="utf-8")

    words = load_words(p)
    assert [w.word for w in words] == ["apple", "moon"]
    assert words[1].category == "astronomy"


def test_load_words_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_words(tmp_path / "missing.json")
