"""Base stage class with common bookkeeping for the generation engine."""

import logging
import re
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

logger = logging.getLogger(__name__)

_WORD_PATTERN = re.compile(r"^[a-z]+$")


class BaseStage(ABC):
    """Base class for every stage of the generation pipeline."""

    def __init__(self):
        """Initialize the stage counters."""
        self.stats: Dict[str, Any] = {
            "runs": 0,
            "last_duration_seconds": None
        }
        self._started_at = None

    @abstractmethod
    def process(self, *args, **kwargs) -> Any:
        """Run the stage on its input and return its output."""
        pass

    def _start(self) -> None:
        self._started_at = time.perf_counter()

    def _finish(self, **counters: Any) -> None:
        """Record the duration of the current run and any stage counters."""
        duration = time.perf_counter() - self._started_at if self._started_at else 0.0
        self.stats["runs"] += 1
        self.stats["last_duration_seconds"] = duration
        self.stats.update(counters)
        logger.debug(f"{self.__class__.__name__} finished in {duration:.2f}s: {counters}")

    def validate_input(self, words: Iterable[Any]) -> List[str]:
        """Validate that every input word is a lowercase alphabetic string.

        Returns the words as a list so callers can iterate them more than once.
        """
        words = list(words)
        invalid = [word for word in words if not isinstance(word, str) or not _WORD_PATTERN.match(word)]
        if invalid:
            raise ValueError(f"Invalid input words: {invalid[:5]}")
        return words

    def get_stage_metadata(self) -> Dict[str, Any]:
        """Get metadata about this stage."""
        return {
            "stage_name": self.__class__.__name__,
            "statistics": dict(self.stats),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
