"""Letter-set enumeration: every distinct 7-letter basis found in the dictionary."""

import logging
from typing import Dict, Iterable

from .base import BaseStage
from ..config import PUZZLE_LETTER_COUNT
from ..models.puzzles import LetterBasis

logger = logging.getLogger(__name__)


class LetterSetEnumerator(BaseStage):
    """Collects the letter sets of all pangram words, one basis per signature."""

    def process(self, words: Iterable[str]) -> Dict[str, LetterBasis]:
        """Map signature -> basis for every word with exactly 7 distinct letters.

        The result is ordered by signature so that candidate discovery order
        does not depend on how the dictionary was iterated.
        """
        self._start()
        words = self.validate_input(words)

        signatures = set()
        pangram_words = 0
        for word in words:
            unique = set(word)
            if len(unique) != PUZZLE_LETTER_COUNT:
                continue
            pangram_words += 1
            signatures.add("".join(sorted(unique)))

        bases = {signature: LetterBasis(signature=signature) for signature in sorted(signatures)}

        logger.info(f"Found {len(bases)} pangram bases from {pangram_words} pangram words")
        self._finish(pangram_words=pangram_words, bases=len(bases))
        return bases
