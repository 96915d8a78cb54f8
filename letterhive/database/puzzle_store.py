"""Reading and writing generated puzzle sets."""

import json
import logging
import re
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from ..models.puzzles import GenerationConstraints, PuzzleSet

logger = logging.getLogger(__name__)

_JS_PUZZLES_PATTERN = re.compile(r"const\s+\w+\s*=\s*(\{[\s\S]*?\});")

OUTPUT_FORMATS = ("json", "js")


class PuzzleStoreError(ValueError):
    """Raised when a puzzle file cannot be written or parsed."""


class PuzzleStore:
    """Serializes a PuzzleSet to the artifact the game loads."""

    def __init__(self, export_name: str = "PUZZLES"):
        self.export_name = export_name

    def dumps(self, puzzle_set: PuzzleSet, fmt: str = "json",
              constraints: Optional[GenerationConstraints] = None) -> str:
        """Render the puzzle set; identical input always renders identical text."""
        if fmt not in OUTPUT_FORMATS:
            raise PuzzleStoreError(f"Unknown output format: {fmt}")

        body = json.dumps(puzzle_set.to_export(), indent=2)
        if fmt == "json":
            return body + "\n"

        header = ["// Letter-hive puzzles", "// Generated from lemma dictionary"]
        if constraints is not None and constraints.min_words is not None:
            header.append(f"// Rule: {constraints.min_words}-{constraints.max_words} words per puzzle")
        header.append(f"// Total Puzzles: {len(puzzle_set)}")

        return "\n".join(header) + f"""

const {self.export_name} = {body};

// Export for both browser and Node.js
if (typeof module !== 'undefined' && module.exports) {{
    module.exports = {{ {self.export_name} }};
}}
"""

    def save(self, puzzle_set: PuzzleSet, path: Union[str, Path], fmt: Optional[str] = None,
             constraints: Optional[GenerationConstraints] = None) -> Path:
        """Write the puzzle set; the format defaults to the file extension."""
        path = Path(path)
        fmt = fmt or ("js" if path.suffix.lower() == ".js" else "json")
        content = self.dumps(puzzle_set, fmt=fmt, constraints=constraints)

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

        logger.info(f"Wrote {len(puzzle_set)} puzzles to {path} ({fmt})")
        return path

    def loads(self, content: str, fmt: str = "json") -> PuzzleSet:
        if fmt == "js":
            match = _JS_PUZZLES_PATTERN.search(content)
            if not match:
                raise PuzzleStoreError("Could not find a puzzle map in JS module")
            content = match.group(1)

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise PuzzleStoreError(f"Invalid puzzle JSON: {e}")

        if not isinstance(data, dict):
            raise PuzzleStoreError("Puzzle file must contain an id-keyed object")

        try:
            return PuzzleSet.from_export(data)
        except (ValidationError, ValueError, TypeError) as e:
            raise PuzzleStoreError(f"Corrupt puzzle entry: {e}")

    def load(self, path: Union[str, Path]) -> PuzzleSet:
        path = Path(path)
        if not path.is_file():
            raise PuzzleStoreError(f"Puzzle file not found: {path}")

        fmt = "js" if path.suffix.lower() == ".js" else "json"
        puzzle_set = self.loads(path.read_text(encoding="utf-8"), fmt=fmt)
        logger.info(f"Loaded {len(puzzle_set)} puzzles from {path}")
        return puzzle_set
