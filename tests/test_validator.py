"""Tests for runtime word validation."""

import pytest

from letterhive.engine import validate_word
from letterhive.models.puzzles import Puzzle, ValidationReason


@pytest.fixture
def puzzle():
    """Puzzle with center b over b,e,a,t,s,n,r."""
    return Puzzle(
        id=0,
        letters=["b", "e", "a", "t", "s", "n", "r"],
        words=["banters", "beast", "beats"],
        max_score=24
    )


@pytest.fixture
def dictionary():
    return {"banters", "beast", "beats", "absent", "stare"}


class TestValidateWord:
    """Tests for validate_word."""

    @pytest.mark.parametrize("word,reason", [
        ("cat", ValidationReason.TOO_SHORT),
        ("stare", ValidationReason.MISSING_CENTER),
        ("beastx", ValidationReason.BAD_LETTER),
        ("abates", ValidationReason.NOT_A_WORD),
        ("absent", ValidationReason.NOT_IN_PUZZLE),
    ])
    def test_rejection_reasons(self, puzzle, dictionary, word, reason):
        """Test each rejection reason on its own."""
        result = validate_word(word, puzzle, dictionary)

        assert result.valid is False
        assert result.reason == reason

    def test_reason_strings(self, puzzle, dictionary):
        """Test the exact reason text the game displays."""
        assert validate_word("cat", puzzle, dictionary).to_dict()["reason"] == "too short"
        assert validate_word("absent", puzzle, dictionary).to_dict()["reason"] == "not in this puzzle's word list"

    def test_already_found(self, puzzle, dictionary):
        """Test that a word cannot be scored twice."""
        result = validate_word("beast", puzzle, dictionary, already_found=["beast"])

        assert result.valid is False
        assert result.reason == ValidationReason.ALREADY_FOUND

    def test_valid_word(self, puzzle, dictionary):
        """Test a plain accepted word."""
        result = validate_word("beast", puzzle, dictionary, already_found=[])

        assert result.valid is True
        assert result.score == 5
        assert result.is_pangram is False
        assert result.to_dict() == {"valid": True, "score": 5, "isPangram": False}

    def test_pangram(self, puzzle, dictionary):
        """Test that a word using all 7 letters earns the bonus."""
        result = validate_word("banters", puzzle, dictionary)

        assert result.valid is True
        assert result.score == 7 + 7
        assert result.is_pangram is True

    def test_first_failing_check_wins(self, puzzle, dictionary):
        """Test priority when several checks fail at once."""
        # Short and missing the center: length is checked first
        assert validate_word("tea", puzzle, dictionary).reason == ValidationReason.TOO_SHORT
        # Missing the center and a bad letter: center is checked first
        assert validate_word("stairs", puzzle, dictionary).reason == ValidationReason.MISSING_CENTER
        # Already found but with a bad letter: letters are checked first
        result = validate_word("beastx", puzzle, dictionary, already_found=["beastx"])
        assert result.reason == ValidationReason.BAD_LETTER

    def test_input_normalized(self, puzzle, dictionary):
        """Test that case and surrounding spaces are ignored."""
        assert validate_word("  BEAST ", puzzle, dictionary).valid is True

    def test_generated_words_always_validate(self, sample_dictionary, open_constraints):
        """Test that every generated word passes the runtime validator."""
        from letterhive.pipeline import PuzzlePipeline

        result = PuzzlePipeline(sample_dictionary).generate_puzzle_set(open_constraints)

        for generated in result["puzzle_set"]:
            for word in generated.words:
                assert validate_word(word, generated, sample_dictionary).valid is True
