"""Acceptance window: word-count bounds and the pangram requirement."""

import logging
from typing import Iterable, List

from .base import BaseStage
from ..models.puzzles import GenerationConstraints, PuzzleCandidate

logger = logging.getLogger(__name__)


def is_acceptable(candidate: PuzzleCandidate, constraints: GenerationConstraints) -> bool:
    """True when the word count is inside the window and enough pangrams exist."""
    if not constraints.min_words <= candidate.word_count <= constraints.max_words:
        return False
    return candidate.pangram_count >= constraints.min_pangrams_per_puzzle


class AcceptanceWindow(BaseStage):
    """Drops candidates outside the acceptance window; rejections are not errors."""

    def __init__(self, constraints: GenerationConstraints):
        super().__init__()
        self.constraints = constraints

    def process(self, candidates: Iterable[PuzzleCandidate]) -> List[PuzzleCandidate]:
        self._start()

        accepted = []
        rejected = 0
        for candidate in candidates:
            if is_acceptable(candidate, self.constraints):
                accepted.append(candidate)
            else:
                rejected += 1

        logger.info(
            f"Accepted {len(accepted)} candidates "
            f"({self.constraints.min_words}-{self.constraints.max_words} words, "
            f">= {self.constraints.min_pangrams_per_puzzle} pangrams); rejected {rejected}"
        )
        self._finish(accepted=len(accepted), rejected=rejected)
        return accepted
