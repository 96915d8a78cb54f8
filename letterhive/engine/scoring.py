"""Word scoring and the closed-alphabet filter rule."""

from typing import Iterable, Sequence

from ..config import MIN_WORD_LENGTH, PANGRAM_BONUS, PUZZLE_LETTER_COUNT, SHORT_WORD_SCORE


def distinct_letters(word: str) -> int:
    return len(set(word))


def is_pangram(word: str) -> bool:
    """A word is a pangram when it uses all 7 puzzle letters."""
    return distinct_letters(word) == PUZZLE_LETTER_COUNT


def score_word(word: str) -> int:
    """Four-letter words score 1, longer words score their length, pangrams add 7."""
    score = SHORT_WORD_SCORE if len(word) == MIN_WORD_LENGTH else len(word)
    if is_pangram(word):
        score += PANGRAM_BONUS
    return score


def score_words(words: Iterable[str]) -> int:
    return sum(score_word(word) for word in words)


def count_pangrams(words: Iterable[str]) -> int:
    return sum(1 for word in words if is_pangram(word))


def word_matches(word: str, center: str, letters: Iterable[str]) -> bool:
    """True when ``word`` is long enough, contains ``center`` and uses only ``letters``."""
    if len(word) < MIN_WORD_LENGTH:
        return False
    if center not in word:
        return False
    return set(word) <= set(letters)


def puzzle_signature(letters: Sequence[str]) -> str:
    """``center:others`` with the outer letters sorted."""
    return f"{letters[0]}:{''.join(sorted(letters[1:]))}"
