"""Runtime word validation, shared with the live game."""

from typing import Collection, Container, Optional

from .scoring import is_pangram, score_word
from ..config import MIN_WORD_LENGTH
from ..models.puzzles import Puzzle, ValidationReason, ValidationResult


def validate_word(word: str, puzzle: Puzzle, dictionary: Container[str],
                  already_found: Optional[Collection[str]] = None) -> ValidationResult:
    """Check a submitted word against a puzzle.

    Checks run in a fixed order and the first failure is reported: length,
    center letter, alphabet, word lists, then duplicates. ``dictionary`` is
    the full word list, used to tell a real word that this puzzle does not
    accept apart from a non-word.
    """
    word = word.strip().lower()

    if len(word) < MIN_WORD_LENGTH:
        return ValidationResult.rejected(ValidationReason.TOO_SHORT)
    if puzzle.center not in word:
        return ValidationResult.rejected(ValidationReason.MISSING_CENTER)

    allowed = set(puzzle.letters)
    if any(char not in allowed for char in word):
        return ValidationResult.rejected(ValidationReason.BAD_LETTER)

    if word not in puzzle.words:
        if word in dictionary:
            return ValidationResult.rejected(ValidationReason.NOT_IN_PUZZLE)
        return ValidationResult.rejected(ValidationReason.NOT_A_WORD)

    if already_found and word in already_found:
        return ValidationResult.rejected(ValidationReason.ALREADY_FOUND)

    return ValidationResult.accepted(score=score_word(word), is_pangram=is_pangram(word))
