"""Puzzle data models for the letter-hive generator."""

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import MIN_WORD_LENGTH, PUZZLE_LETTER_COUNT, Settings, settings


def _check_letters(letters) -> None:
    if len(letters) != PUZZLE_LETTER_COUNT:
        raise ValueError(f"Expected {PUZZLE_LETTER_COUNT} letters, got {len(letters)}")
    if len(set(letters)) != len(letters):
        raise ValueError(f"Letters must be distinct: {''.join(letters)}")
    for letter in letters:
        if len(letter) != 1 or not ("a" <= letter <= "z"):
            raise ValueError(f"Invalid letter: {letter!r}")


class LetterBasis(BaseModel):
    """A set of 7 distinct letters taken from at least one pangram word."""

    model_config = ConfigDict(frozen=True)

    signature: str = Field(..., description="The 7 letters sorted and joined")

    @field_validator("signature")
    @classmethod
    def check_signature(cls, value: str) -> str:
        _check_letters(value)
        if "".join(sorted(value)) != value:
            raise ValueError(f"Signature must be sorted: {value}")
        return value

    @classmethod
    def from_letters(cls, letters) -> "LetterBasis":
        return cls(signature="".join(sorted(set(letters))))

    @property
    def letters(self) -> Tuple[str, ...]:
        return tuple(self.signature)

    def ordered_letters(self, center: str) -> List[str]:
        """Center first, then the other six in sorted (basis) order."""
        if center not in self.signature:
            raise ValueError(f"Center letter {center!r} is not in basis {self.signature}")
        return [center] + [letter for letter in self.signature if letter != center]


class PuzzleCandidate(BaseModel):
    """One concrete puzzle attempt for a basis and a center letter."""

    model_config = ConfigDict(frozen=True)

    letters: Tuple[str, ...] = Field(..., description="Center letter first, then the six outer letters")
    words: Tuple[str, ...] = Field(..., description="Accepted words, sorted ascending")
    score: int = Field(..., ge=0, description="Sum of per-word scores")
    pangram_count: int = Field(..., ge=0, description="Number of words using all 7 letters")

    @property
    def center(self) -> str:
        return self.letters[0]

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def signature(self) -> str:
        """Center plus the sorted outer letters, e.g. ``b:aenrst``."""
        return f"{self.letters[0]}:{''.join(sorted(self.letters[1:]))}"

    @property
    def basis_signature(self) -> str:
        return "".join(sorted(self.letters))


class Puzzle(BaseModel):
    """A finalized puzzle as shipped to the game."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(..., ge=0, description="Positional identifier, rank order")
    letters: List[str] = Field(..., description="Center letter first, then the six outer letters")
    words: List[str] = Field(..., description="Accepted words, sorted ascending")
    max_score: int = Field(..., ge=0, alias="maxScore", description="Sum of per-word scores")

    @model_validator(mode="after")
    def check_invariants(self) -> "Puzzle":
        _check_letters(self.letters)
        center = self.letters[0]
        allowed = set(self.letters)
        for word in self.words:
            if len(word) < MIN_WORD_LENGTH:
                raise ValueError(f"Word {word!r} is shorter than {MIN_WORD_LENGTH}")
            if center not in word:
                raise ValueError(f"Word {word!r} is missing center letter {center!r}")
            if not set(word) <= allowed:
                raise ValueError(f"Word {word!r} uses letters outside {''.join(self.letters)}")
        if self.words != sorted(self.words):
            raise ValueError("Words must be sorted ascending")
        return self

    @property
    def center(self) -> str:
        return self.letters[0]

    @classmethod
    def from_candidate(cls, puzzle_id: int, candidate: PuzzleCandidate) -> "Puzzle":
        return cls(
            id=puzzle_id,
            letters=list(candidate.letters),
            words=list(candidate.words),
            max_score=candidate.score
        )

    def to_export(self) -> Dict[str, Any]:
        """Wire form consumed by the game: letters, words, maxScore."""
        return self.model_dump(by_alias=True, exclude={"id"})


class PuzzleSet(BaseModel):
    """Mapping from puzzle id to puzzle, in id order."""

    puzzles: Dict[int, Puzzle] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_ids(self) -> "PuzzleSet":
        for key, puzzle in self.puzzles.items():
            if key != puzzle.id:
                raise ValueError(f"Puzzle stored under id {key} reports id {puzzle.id}")
        return self

    def __len__(self) -> int:
        return len(self.puzzles)

    def __iter__(self) -> Iterator[Puzzle]:
        return iter(self.puzzles.values())

    def __contains__(self, puzzle_id: object) -> bool:
        return puzzle_id in self.puzzles

    def get(self, puzzle_id: int) -> Optional[Puzzle]:
        return self.puzzles.get(puzzle_id)

    def ids(self) -> List[int]:
        return list(self.puzzles)

    def average_score(self) -> Optional[float]:
        if not self.puzzles:
            return None
        return sum(p.max_score for p in self.puzzles.values()) / len(self.puzzles)

    def to_export(self) -> Dict[str, Dict[str, Any]]:
        """Serialize with string-valued ids, as the game expects."""
        return {str(puzzle_id): puzzle.to_export() for puzzle_id, puzzle in self.puzzles.items()}

    @classmethod
    def from_export(cls, data: Dict[str, Dict[str, Any]]) -> "PuzzleSet":
        puzzles = {}
        for key in sorted(data, key=int):
            puzzle_id = int(key)
            puzzles[puzzle_id] = Puzzle(id=puzzle_id, **data[key])
        return cls(puzzles=puzzles)


class GenerationConstraints(BaseModel):
    """Per-run overrides for the generation parameters.

    Fields left as ``None`` fall back to the global settings in ``resolve``.
    """

    target_puzzle_count: Optional[int] = Field(None, ge=0, description="Number of puzzles to keep")
    min_words: Optional[int] = Field(None, ge=0, description="Lower bound of the acceptance window")
    max_words: Optional[int] = Field(None, ge=0, description="Upper bound of the acceptance window")
    min_pangrams_per_puzzle: Optional[int] = Field(None, ge=0, description="Pangrams required per puzzle")
    target_average_score: Optional[float] = Field(None, ge=0, description="Score the selector ranks towards")
    unique_basis: bool = Field(default=False, description="Keep at most one center letter per basis")

    @model_validator(mode="after")
    def check_window(self) -> "GenerationConstraints":
        if self.min_words is not None and self.max_words is not None and self.min_words > self.max_words:
            raise ValueError(f"min_words ({self.min_words}) exceeds max_words ({self.max_words})")
        return self

    def resolve(self, base: Optional[Settings] = None) -> "GenerationConstraints":
        """Return constraints with every unset parameter taken from settings."""
        base = base or settings
        values = self.model_dump()
        for name in ("target_puzzle_count", "min_words", "max_words",
                     "min_pangrams_per_puzzle", "target_average_score"):
            if values[name] is None:
                values[name] = getattr(base, name)
        return GenerationConstraints(**values)


class ValidationReason(str, Enum):
    """Why a submitted word was refused, in check order."""
    TOO_SHORT = "too short"
    MISSING_CENTER = "missing center"
    BAD_LETTER = "bad letter"
    NOT_A_WORD = "not a valid word"
    NOT_IN_PUZZLE = "not in this puzzle's word list"
    ALREADY_FOUND = "already found"


class ValidationResult(BaseModel):
    """Outcome of checking one submitted word against a puzzle."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    valid: bool
    reason: Optional[ValidationReason] = None
    score: Optional[int] = None
    is_pangram: Optional[bool] = Field(None, alias="isPangram")

    @classmethod
    def rejected(cls, reason: ValidationReason) -> "ValidationResult":
        return cls(valid=False, reason=reason)

    @classmethod
    def accepted(cls, score: int, is_pangram: bool) -> "ValidationResult":
        return cls(valid=True, score=score, is_pangram=is_pangram)

    def to_dict(self) -> Dict[str, Any]:
        """``{valid, reason}`` on failure, ``{valid, score, isPangram}`` on success."""
        return self.model_dump(by_alias=True, exclude_none=True)


class QualityReport(BaseModel):
    """Result of checking a generated puzzle set against its quality properties."""

    is_valid: bool = Field(default=True, description="False when any issue was found")
    puzzle_count: int = Field(default=0, description="Number of puzzles checked")
    average_score: Optional[float] = Field(None, description="Mean maxScore across the set")
    issues: List[str] = Field(default_factory=list, description="Hard property violations")
    warnings: List[str] = Field(default_factory=list, description="Soft objective misses")

    def add_issue(self, message: str) -> None:
        self.is_valid = False
        self.issues.append(message)


class WordSubmission(BaseModel):
    """Request body for checking a word against a puzzle."""

    word: str = Field(..., description="The submitted word")
    already_found: List[str] = Field(default_factory=list, description="Words the player already found")
