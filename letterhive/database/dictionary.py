"""Word dictionary loading and letter-mask indexing."""

import json
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple, Union

from ..config import MIN_WORD_LENGTH

logger = logging.getLogger(__name__)

_WORD_PATTERN = re.compile(r"^[a-z]+$")
_JS_SET_PATTERN = re.compile(r"new Set\((\[[\s\S]*?\])\)")
_JS_OBJECT_PATTERN = re.compile(r"const\s+\w+\s*=\s*(\{[\s\S]*\});")


class DictionaryError(ValueError):
    """Raised when a dictionary artifact is missing or malformed."""


def letter_mask(letters: Iterable[str]) -> int:
    """Bitmask of the distinct letters, bit 0 for 'a'."""
    mask = 0
    for letter in letters:
        mask |= 1 << (ord(letter) - 97)
    return mask


class WordDictionary:
    """Immutable set of lowercase words with a canonical sorted order."""

    def __init__(self, words: Iterable[str]):
        accepted = set()
        dropped = 0
        for raw in words:
            if not isinstance(raw, str):
                raise DictionaryError(f"Dictionary entry is not a string: {raw!r}")
            word = raw.strip().lower()
            if not _WORD_PATTERN.match(word):
                raise DictionaryError(f"Dictionary entry is not alphabetic: {raw!r}")
            if len(word) < MIN_WORD_LENGTH:
                dropped += 1
                continue
            accepted.add(word)

        if dropped:
            logger.debug(f"Dropped {dropped} entries shorter than {MIN_WORD_LENGTH} letters")

        self._words = frozenset(accepted)
        self._sorted: Tuple[str, ...] = tuple(sorted(accepted))

    @property
    def words(self) -> Tuple[str, ...]:
        """All words in ascending order."""
        return self._sorted

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __len__(self) -> int:
        return len(self._sorted)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sorted)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "WordDictionary":
        """Load a dictionary artifact (.txt, .json or generated .js)."""
        path = Path(path)
        if not path.is_file():
            raise DictionaryError(f"Dictionary file not found: {path}")

        content = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()

        if suffix == ".json":
            entries = cls._parse_json(content, path)
        elif suffix == ".js":
            entries = cls._parse_js(content, path)
        else:
            entries = [
                line.strip() for line in content.splitlines()
                if line.strip() and not line.lstrip().startswith("#")
            ]

        dictionary = cls(entries)
        logger.info(f"Loaded {len(dictionary)} words from {path}")
        if not dictionary:
            logger.warning(f"Dictionary {path} contains no usable words")
        return dictionary

    @staticmethod
    def _parse_json(content: str, path: Path) -> List[str]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DictionaryError(f"Invalid JSON in {path}: {e}")

        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            # Enriched form: {word: {def, rank, pos}}
            return list(data.keys())
        raise DictionaryError(f"{path} must contain a list of words or a word-keyed object")

    @classmethod
    def _parse_js(cls, content: str, path: Path) -> List[str]:
        match = _JS_SET_PATTERN.search(content) or _JS_OBJECT_PATTERN.search(content)
        if not match:
            raise DictionaryError(f"Could not find a word set or word map in {path}")
        return cls._parse_json(match.group(1), path)


class WordIndex:
    """Dictionary words grouped by their distinct-letter mask.

    A word fits a letter set exactly when its mask is a submask of the set's
    mask, so the words of a 7-letter basis are found by walking its 128
    submasks instead of scanning the whole dictionary.
    """

    def __init__(self, dictionary: Iterable[str], max_letters: int = 7):
        groups: Dict[int, List[str]] = {}
        for word in dictionary:
            if len(word) < MIN_WORD_LENGTH:
                continue
            mask = letter_mask(word)
            if bin(mask).count("1") > max_letters:
                continue
            groups.setdefault(mask, []).append(word)
        self._groups = groups

    def __len__(self) -> int:
        return len(self._groups)

    def submask_groups(self, mask: int, required: int = 0) -> Iterator[Tuple[int, List[str]]]:
        """Yield (submask, words) for every non-empty submask containing ``required``."""
        sub = mask
        while sub:
            if sub & required == required:
                words = self._groups.get(sub)
                if words:
                    yield sub, words
            sub = (sub - 1) & mask

    def words_within(self, letters: Iterable[str], required: str = "") -> List[str]:
        """Sorted words using only ``letters`` and containing every ``required`` letter."""
        found = []
        for _, words in self.submask_groups(letter_mask(letters), letter_mask(required)):
            found.extend(words)
        return sorted(found)
