"""Main puzzle generation pipeline orchestrating all stages."""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from ..config import settings
from ..database import WordDictionary, DictionaryError
from ..engine import (
    LetterSetEnumerator, CandidateBuilder, AcceptanceWindow, PuzzleSelector, check_puzzle_set
)
from ..models.puzzles import GenerationConstraints, PuzzleSet, QualityReport

logger = logging.getLogger(__name__)


class PuzzlePipeline:
    """Runs enumerate -> build -> accept -> select over one dictionary."""

    def __init__(self, dictionary: WordDictionary, workers: Optional[int] = None):
        """Initialize the puzzle pipeline."""
        if dictionary is None:
            raise DictionaryError("A dictionary is required to generate puzzles")

        self.dictionary = dictionary
        self.workers = workers or settings.workers

        self.enumerator = LetterSetEnumerator()
        self.builder = CandidateBuilder(workers=self.workers)

        # Pipeline statistics
        self.stats = {
            "total_runs": 0,
            "successful_runs": 0,
            "failed_runs": 0,
            "last_puzzle_count": 0,
            "average_processing_time": 0.0,
            "last_generation_time": None
        }

    def generate_puzzle_set(self, constraints: Optional[GenerationConstraints] = None,
                            seen_signatures: Optional[Set[str]] = None) -> Dict[str, Any]:
        """Generate a complete puzzle set through every stage."""
        start_time = time.time()
        constraints = (constraints or GenerationConstraints()).resolve()

        try:
            logger.info(f"Starting puzzle generation over {len(self.dictionary)} words")

            # Stage 1: Letter-set enumeration
            bases = self.enumerator.process(self.dictionary)

            # Stage 2: Candidate building
            candidates = self.builder.process(bases, self.dictionary)

            # Stage 3: Acceptance window
            window = AcceptanceWindow(constraints)
            accepted = window.process(candidates)

            # Stage 4: Selection
            selector = PuzzleSelector(
                target_count=constraints.target_puzzle_count,
                target_score=constraints.target_average_score,
                unique_basis=constraints.unique_basis
            )
            puzzle_set, seen_signatures = selector.process(accepted, seen_signatures)

            processing_time = time.time() - start_time
            self._update_stats(success=True, processing_time=processing_time, puzzle_count=len(puzzle_set))

            logger.info(f"Generated {len(puzzle_set)} puzzles in {processing_time:.2f} seconds")

            return {
                "success": True,
                "puzzle_set": puzzle_set,
                "seen_signatures": seen_signatures,
                "constraints": constraints,
                "statistics": {
                    "bases": len(bases),
                    "candidates": len(candidates),
                    "accepted": len(accepted),
                    "selected": len(puzzle_set),
                    "average_score": puzzle_set.average_score()
                },
                "processing_time_seconds": processing_time
            }

        except Exception as e:
            processing_time = time.time() - start_time
            self._update_stats(success=False, processing_time=processing_time)
            logger.error(f"Pipeline failed after {processing_time:.2f} seconds: {e}")
            raise

    def validate_puzzle_set(self, puzzle_set: PuzzleSet,
                            constraints: Optional[GenerationConstraints] = None) -> QualityReport:
        """Check a puzzle set against this pipeline's dictionary."""
        constraints = (constraints or GenerationConstraints()).resolve()
        return check_puzzle_set(
            puzzle_set,
            self.dictionary,
            constraints,
            tolerance=settings.average_score_tolerance
        )

    def _update_stats(self, success: bool, processing_time: float, puzzle_count: int = 0) -> None:
        """Update pipeline statistics."""
        self.stats["total_runs"] += 1
        self.stats["last_generation_time"] = datetime.now(timezone.utc).isoformat()

        if success:
            self.stats["successful_runs"] += 1
            self.stats["last_puzzle_count"] = puzzle_count
        else:
            self.stats["failed_runs"] += 1

        # Update average processing time
        total_successful = self.stats["successful_runs"]
        if success and total_successful > 0:
            current_avg = self.stats["average_processing_time"]
            new_avg = ((current_avg * (total_successful - 1)) + processing_time) / total_successful
            self.stats["average_processing_time"] = new_avg

    def get_status(self) -> Dict[str, Any]:
        """Get current pipeline status and statistics."""
        return {
            "pipeline_status": "operational",
            "dictionary_size": len(self.dictionary),
            "stages": {
                "enumerator": self.enumerator.get_stage_metadata(),
                "builder": self.builder.get_stage_metadata()
            },
            "statistics": self.stats,
            "configuration": {
                "workers": self.workers,
                "target_puzzle_count": settings.target_puzzle_count,
                "min_words": settings.min_words,
                "max_words": settings.max_words,
                "min_pangrams_per_puzzle": settings.min_pangrams_per_puzzle,
                "target_average_score": settings.target_average_score
            }
        }
