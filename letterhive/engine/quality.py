"""Quality checks over a generated puzzle set."""

import logging
from typing import Container, Optional

from .scoring import count_pangrams, puzzle_signature, score_words, word_matches
from ..models.puzzles import GenerationConstraints, PuzzleSet, QualityReport

logger = logging.getLogger(__name__)


def check_puzzle_set(puzzle_set: PuzzleSet, dictionary: Container[str],
                     constraints: GenerationConstraints,
                     tolerance: Optional[float] = None) -> QualityReport:
    """Check every puzzle against the shipping rules.

    Per-puzzle violations are issues. The average score only produces a
    warning, and only when ``tolerance`` is given.
    """
    report = QualityReport(puzzle_count=len(puzzle_set), average_score=puzzle_set.average_score())

    if not puzzle_set:
        report.warnings.append("Puzzle set is empty")

    signatures = {}
    for puzzle in puzzle_set:
        label = f"Puzzle {puzzle.id} ({''.join(puzzle.letters)})"

        count = len(puzzle.words)
        if not constraints.min_words <= count <= constraints.max_words:
            report.add_issue(
                f"{label} has {count} words, expected {constraints.min_words}-{constraints.max_words}"
            )

        if count_pangrams(puzzle.words) < constraints.min_pangrams_per_puzzle:
            report.add_issue(f"{label} has fewer than {constraints.min_pangrams_per_puzzle} pangrams")

        for word in puzzle.words:
            if not word_matches(word, puzzle.center, puzzle.letters):
                report.add_issue(f"{label} word '{word}' breaks the letter rules")
            if word not in dictionary:
                report.add_issue(f"{label} word '{word}' is not in the dictionary")

        expected = score_words(puzzle.words)
        if puzzle.max_score != expected:
            report.add_issue(f"{label} maxScore is {puzzle.max_score}, words score {expected}")

        signature = puzzle_signature(puzzle.letters)
        if signature in signatures:
            report.add_issue(f"{label} repeats the letters of puzzle {signatures[signature]}")
        else:
            signatures[signature] = puzzle.id

    if tolerance is not None and report.average_score is not None:
        target = constraints.target_average_score
        if abs(report.average_score - target) > tolerance:
            report.warnings.append(
                f"Average score {report.average_score:.1f} is outside {target} +/- {tolerance}"
            )

    if report.is_valid:
        logger.info(f"Quality check passed for {report.puzzle_count} puzzles")
    else:
        logger.warning(f"Quality check found {len(report.issues)} issues in {report.puzzle_count} puzzles")
    return report
