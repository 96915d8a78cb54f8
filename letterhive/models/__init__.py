"""Data models for the letter-hive generator."""

from .puzzles import (
    LetterBasis,
    PuzzleCandidate,
    Puzzle,
    PuzzleSet,
    GenerationConstraints,
    ValidationReason,
    ValidationResult,
    QualityReport,
    WordSubmission
)

__all__ = [
    "LetterBasis",
    "PuzzleCandidate",
    "Puzzle",
    "PuzzleSet",
    "GenerationConstraints",
    "ValidationReason",
    "ValidationResult",
    "QualityReport",
    "WordSubmission"
]
