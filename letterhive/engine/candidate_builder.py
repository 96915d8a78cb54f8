"""Candidate building: the valid-word subset and score for each basis and center."""

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, Iterable, List, Optional

from .base import BaseStage
from .scoring import count_pangrams, score_words
from ..database.dictionary import WordIndex, letter_mask
from ..models.puzzles import LetterBasis, PuzzleCandidate

logger = logging.getLogger(__name__)

# Set in each worker process by _init_worker.
_worker_index: Optional[WordIndex] = None


def build_candidates_for_basis(index: WordIndex, basis: LetterBasis) -> List[PuzzleCandidate]:
    """One candidate per center letter, centers in basis order."""
    basis_mask = letter_mask(basis.signature)

    # Words of every submask, gathered once and reused for each center.
    groups = list(index.submask_groups(basis_mask))

    candidates = []
    for center in basis.signature:
        center_bit = letter_mask(center)
        words = sorted(word for mask, group in groups if mask & center_bit for word in group)
        candidates.append(PuzzleCandidate(
            letters=tuple(basis.ordered_letters(center)),
            words=tuple(words),
            score=score_words(words),
            pangram_count=count_pangrams(words)
        ))
    return candidates


def _init_worker(index: WordIndex) -> None:
    global _worker_index
    _worker_index = index


def _build_in_worker(basis: LetterBasis) -> List[PuzzleCandidate]:
    return build_candidates_for_basis(_worker_index, basis)


class CandidateBuilder(BaseStage):
    """Builds every (basis, center) candidate against the dictionary."""

    def __init__(self, workers: int = 1, chunksize: int = 64):
        """Initialize the builder.

        ``workers`` above 1 spreads bases across a process pool; results are
        merged in basis order, so the output is the same as a sequential run.
        """
        super().__init__()
        self.workers = workers
        self.chunksize = chunksize

    def process(self, bases: Dict[str, LetterBasis], words: Iterable[str]) -> List[PuzzleCandidate]:
        """Return candidates in discovery order: bases by signature, then centers."""
        self._start()

        index = WordIndex(self.validate_input(words))
        basis_list = list(bases.values())

        candidates: List[PuzzleCandidate] = []
        if self.workers > 1 and len(basis_list) > 1:
            logger.info(f"Building candidates for {len(basis_list)} bases with {self.workers} workers")
            with ProcessPoolExecutor(max_workers=self.workers, initializer=_init_worker,
                                     initargs=(index,)) as executor:
                for built in executor.map(_build_in_worker, basis_list, chunksize=self.chunksize):
                    candidates.extend(built)
        else:
            logger.info(f"Building candidates for {len(basis_list)} bases")
            for i, basis in enumerate(basis_list, start=1):
                candidates.extend(build_candidates_for_basis(index, basis))
                if i % 1000 == 0:
                    logger.info(f"Processed {i}/{len(basis_list)} bases...")

        self._finish(candidates=len(candidates), letter_groups=len(index))
        return candidates
