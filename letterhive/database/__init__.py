"""Dictionary and puzzle-file layer for the letter-hive generator."""

from .dictionary import WordDictionary, WordIndex, DictionaryError, letter_mask
from .puzzle_store import PuzzleStore, PuzzleStoreError

__all__ = ["WordDictionary", "WordIndex", "DictionaryError", "letter_mask", "PuzzleStore", "PuzzleStoreError"]
