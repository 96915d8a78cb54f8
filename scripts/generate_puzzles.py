#!/usr/bin/env python3
"""Generate the letter-hive puzzle set from a dictionary artifact.

Usage:
  python3 scripts/generate_puzzles.py --dictionary lang/en/words.txt --output lang/en/puzzles.json
  python3 scripts/generate_puzzles.py --dictionary lang/it/words_it_lemmas.js \
      --output lang/it/puzzles_it.js --export-name PUZZLES_IT --min-words 30 --max-words 60
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging
from pydantic import ValidationError

from letterhive.config import settings
from letterhive.database import WordDictionary, DictionaryError, PuzzleStore
from letterhive.models import GenerationConstraints
from letterhive.pipeline import PuzzlePipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate letter-hive puzzles from a dictionary")
    parser.add_argument("--dictionary", default=settings.dictionary_path, help="Word list (.txt, .json or .js)")
    parser.add_argument("--output", default=settings.output_path, help="Output puzzle file")
    parser.add_argument("--format", choices=["json", "js"], default=None,
                        help="Output format (default: from the output extension)")
    parser.add_argument("--export-name", default=settings.export_name, help="Variable name in JS output")
    parser.add_argument("--target-count", type=int, default=None, help="Number of puzzles to keep")
    parser.add_argument("--min-words", type=int, default=None, help="Minimum words per puzzle")
    parser.add_argument("--max-words", type=int, default=None, help="Maximum words per puzzle")
    parser.add_argument("--min-pangrams", type=int, default=None, help="Minimum pangrams per puzzle")
    parser.add_argument("--target-score", type=float, default=None, help="Target average maxScore")
    parser.add_argument("--unique-basis", action="store_true", help="One center letter per letter set")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes for candidate building")
    return parser


def main(argv=None) -> int:
    """Main generation function."""
    args = build_parser().parse_args(argv)

    try:
        constraints = GenerationConstraints(
            target_puzzle_count=args.target_count,
            min_words=args.min_words,
            max_words=args.max_words,
            min_pangrams_per_puzzle=args.min_pangrams,
            target_average_score=args.target_score,
            unique_basis=args.unique_basis
        ).resolve()
    except ValidationError as e:
        logger.error(f"Invalid generation parameters: {e}")
        return 2

    try:
        dictionary = WordDictionary.load(args.dictionary)
    except DictionaryError as e:
        logger.error(f"Refusing to generate puzzles: {e}")
        return 1

    pipeline = PuzzlePipeline(dictionary, workers=args.workers)
    result = pipeline.generate_puzzle_set(constraints)
    puzzle_set = result["puzzle_set"]

    store = PuzzleStore(export_name=args.export_name)
    path = store.save(puzzle_set, args.output, fmt=args.format, constraints=constraints)

    stats = result["statistics"]
    logger.info(f"Bases: {stats['bases']}, candidates: {stats['candidates']}, accepted: {stats['accepted']}")
    logger.info(f"Total puzzles: {len(puzzle_set)} written to {path}")
    if stats["average_score"] is not None:
        logger.info(f"Average maxScore: {stats['average_score']:.1f}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    sys.exit(main())
