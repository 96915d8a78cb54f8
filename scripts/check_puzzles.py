#!/usr/bin/env python3
"""Quality check for a generated puzzle file."""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging
from pydantic import ValidationError

from letterhive.config import settings
from letterhive.database import WordDictionary, DictionaryError, PuzzleStore, PuzzleStoreError
from letterhive.engine import check_puzzle_set
from letterhive.models import GenerationConstraints

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Check every puzzle in the file; exit non-zero on any issue."""
    parser = argparse.ArgumentParser(description="Check a letter-hive puzzle file")
    parser.add_argument("--puzzles", default=settings.output_path, help="Puzzle file (.json or .js)")
    parser.add_argument("--dictionary", default=settings.dictionary_path, help="Source word list")
    parser.add_argument("--min-words", type=int, default=None)
    parser.add_argument("--max-words", type=int, default=None)
    parser.add_argument("--tolerance", type=float, default=settings.average_score_tolerance,
                        help="Allowed distance of the average score from the target")
    args = parser.parse_args(argv)

    try:
        dictionary = WordDictionary.load(args.dictionary)
        puzzle_set = PuzzleStore().load(args.puzzles)
    except (DictionaryError, PuzzleStoreError) as e:
        logger.error(f"Cannot check puzzles: {e}")
        return 1

    try:
        constraints = GenerationConstraints(min_words=args.min_words, max_words=args.max_words).resolve()
    except ValidationError as e:
        logger.error(f"Invalid check parameters: {e}")
        return 2

    report = check_puzzle_set(puzzle_set, dictionary, constraints, tolerance=args.tolerance)

    for warning in report.warnings:
        logger.warning(warning)
    for issue in report.issues:
        logger.error(issue)

    if not report.is_valid:
        logger.error(f"✗ {len(report.issues)} issues in {report.puzzle_count} puzzles")
        return 1

    logger.info(f"✓ {report.puzzle_count} puzzles passed (average score {report.average_score})")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
