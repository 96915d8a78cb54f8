"""Selection of the final puzzle set by closeness to a target score."""

import logging
from typing import List, Optional, Set, Tuple

from .base import BaseStage
from ..models.puzzles import Puzzle, PuzzleCandidate, PuzzleSet

logger = logging.getLogger(__name__)


class PuzzleSelector(BaseStage):
    """Deduplicates, ranks and numbers accepted candidates."""

    def __init__(self, target_count: int, target_score: float, unique_basis: bool = False):
        super().__init__()
        self.target_count = target_count
        self.target_score = target_score
        self.unique_basis = unique_basis

    def deduplicate(self, candidates: List[PuzzleCandidate],
                    seen_signatures: Set[str]) -> List[PuzzleCandidate]:
        """Keep the first candidate for each center:letters signature not already seen."""
        considered = set(seen_signatures)
        unique = []
        for candidate in candidates:
            if candidate.signature in considered:
                continue
            considered.add(candidate.signature)
            unique.append(candidate)
        return unique

    def rank(self, candidates: List[PuzzleCandidate]) -> List[PuzzleCandidate]:
        """Order by distance to the target score; sorted() is stable, so ties keep discovery order."""
        return sorted(candidates, key=lambda c: abs(c.score - self.target_score))

    def process(self, candidates: List[PuzzleCandidate],
                seen_signatures: Optional[Set[str]] = None) -> Tuple[PuzzleSet, Set[str]]:
        """Select up to ``target_count`` puzzles.

        Returns the puzzle set and the signature set extended with every
        selected puzzle, so a later pass can be fed the same set.
        """
        self._start()
        seen_signatures = set(seen_signatures or ())

        unique = self.deduplicate(candidates, seen_signatures)
        ranked = self.rank(unique)

        selected: List[PuzzleCandidate] = []
        used_bases = set()
        for candidate in ranked:
            if len(selected) >= self.target_count:
                break
            if self.unique_basis:
                if candidate.basis_signature in used_bases:
                    continue
                used_bases.add(candidate.basis_signature)
            selected.append(candidate)

        puzzles = {}
        for puzzle_id, candidate in enumerate(selected):
            puzzles[puzzle_id] = Puzzle.from_candidate(puzzle_id, candidate)
            seen_signatures.add(candidate.signature)
        puzzle_set = PuzzleSet(puzzles=puzzles)

        if puzzle_set:
            logger.info(
                f"Selected {len(puzzle_set)} of {len(unique)} unique candidates, "
                f"average score {puzzle_set.average_score():.1f} (target {self.target_score})"
            )
        else:
            logger.warning("No candidates survived filtering; puzzle set is empty")

        self._finish(
            input_candidates=len(candidates),
            duplicates=len(candidates) - len(unique),
            selected=len(puzzle_set)
        )
        return puzzle_set, seen_signatures
