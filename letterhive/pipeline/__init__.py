"""Pipeline orchestration for the letter-hive generator."""

from .puzzle_pipeline import PuzzlePipeline

__all__ = ["PuzzlePipeline"]
