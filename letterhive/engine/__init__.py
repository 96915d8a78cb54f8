"""Generation engine stages for the letter-hive generator."""

from .base import BaseStage
from .enumerator import LetterSetEnumerator
from .candidate_builder import CandidateBuilder, build_candidates_for_basis
from .acceptance import AcceptanceWindow, is_acceptable
from .selector import PuzzleSelector
from .validator import validate_word
from .quality import check_puzzle_set

__all__ = [
    "BaseStage",
    "LetterSetEnumerator",
    "CandidateBuilder",
    "build_candidates_for_basis",
    "AcceptanceWindow",
    "is_acceptable",
    "PuzzleSelector",
    "validate_word",
    "check_puzzle_set"
]
