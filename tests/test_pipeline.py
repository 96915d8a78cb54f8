"""Integration tests for the puzzle generation pipeline."""

import pytest
from unittest.mock import patch

from letterhive.database import WordDictionary, DictionaryError, PuzzleStore
from letterhive.engine import check_puzzle_set
from letterhive.engine.scoring import count_pangrams, score_words
from letterhive.models.puzzles import GenerationConstraints, Puzzle, PuzzleSet
from letterhive.pipeline import PuzzlePipeline


class TestPuzzlePipeline:
    """Integration tests for the puzzle generation pipeline."""

    @pytest.fixture
    def pipeline(self, sample_dictionary):
        """Create a sequential pipeline over the sample dictionary."""
        return PuzzlePipeline(sample_dictionary, workers=1)

    def test_pipeline_initialization(self, pipeline):
        """Test that pipeline initializes correctly."""
        assert pipeline.enumerator is not None
        assert pipeline.builder is not None
        assert pipeline.stats["total_runs"] == 0
        assert pipeline.stats["successful_runs"] == 0
        assert pipeline.stats["failed_runs"] == 0

    def test_requires_dictionary(self):
        """Test that the pipeline refuses to run without a dictionary."""
        with pytest.raises(DictionaryError):
            PuzzlePipeline(None)

    def test_full_pipeline_success(self, pipeline, open_constraints):
        """Test a run where every candidate is accepted."""
        result = pipeline.generate_puzzle_set(open_constraints)

        assert result["success"] is True
        assert result["statistics"]["bases"] == 2
        assert result["statistics"]["candidates"] == 14
        assert result["statistics"]["accepted"] == 14
        assert result["statistics"]["selected"] == 14
        assert "processing_time_seconds" in result

        assert pipeline.stats["total_runs"] == 1
        assert pipeline.stats["successful_runs"] == 1
        assert pipeline.stats["last_puzzle_count"] == 14

    def test_generated_puzzles_hold_invariants(self, pipeline, sample_dictionary, open_constraints):
        """Test every shipping property on the generated set."""
        puzzle_set = pipeline.generate_puzzle_set(open_constraints)["puzzle_set"]

        assert puzzle_set.ids() == list(range(len(puzzle_set)))
        signatures = set()
        for puzzle in puzzle_set:
            assert open_constraints.min_words <= len(puzzle.words) <= open_constraints.max_words
            assert count_pangrams(puzzle.words) >= 1
            assert puzzle.max_score == score_words(puzzle.words)
            for word in puzzle.words:
                assert word in sample_dictionary
                assert puzzle.letters[0] in word
                assert set(word) <= set(puzzle.letters)
            signature = (puzzle.letters[0], frozenset(puzzle.letters))
            assert signature not in signatures
            signatures.add(signature)

    def test_selection_ranked_by_target(self, pipeline, open_constraints):
        """Test that ids follow distance to the target score."""
        puzzle_set = pipeline.generate_puzzle_set(open_constraints)["puzzle_set"]

        diffs = [abs(p.max_score - open_constraints.target_average_score) for p in puzzle_set]
        assert diffs == sorted(diffs)

    def test_target_count_limits_output(self, pipeline, open_constraints):
        """Test that only the closest puzzles are kept."""
        constraints = open_constraints.model_copy(update={"target_puzzle_count": 3})

        puzzle_set = pipeline.generate_puzzle_set(constraints)["puzzle_set"]

        assert len(puzzle_set) == 3

    def test_unique_basis(self, pipeline, open_constraints):
        """Test one puzzle per letter set."""
        constraints = open_constraints.model_copy(update={"unique_basis": True})

        puzzle_set = pipeline.generate_puzzle_set(constraints)["puzzle_set"]

        assert sorted("".join(sorted(p.letters)) for p in puzzle_set) == ["abenrst", "aegnrst"]

    def test_nothing_accepted(self, pipeline):
        """Test that an unreachable window gives an empty set, not an error."""
        constraints = GenerationConstraints(min_words=500, max_words=600)

        result = pipeline.generate_puzzle_set(constraints)

        assert result["success"] is True
        assert len(result["puzzle_set"]) == 0
        assert result["statistics"]["average_score"] is None

    def test_empty_dictionary(self, open_constraints):
        """Test that an empty dictionary propagates to an empty set."""
        result = PuzzlePipeline(WordDictionary([])).generate_puzzle_set(open_constraints)

        assert len(result["puzzle_set"]) == 0

    def test_deterministic_output(self, sample_words, open_constraints):
        """Test that two runs render byte-identical files."""
        store = PuzzleStore()
        first = PuzzlePipeline(WordDictionary(sample_words)).generate_puzzle_set(open_constraints)
        second = PuzzlePipeline(WordDictionary(reversed(sample_words))).generate_puzzle_set(open_constraints)

        assert store.dumps(first["puzzle_set"]) == store.dumps(second["puzzle_set"])

    def test_parallel_output_matches(self, sample_dictionary, open_constraints):
        """Test that worker processes do not change the output."""
        store = PuzzleStore()
        sequential = PuzzlePipeline(sample_dictionary, workers=1).generate_puzzle_set(open_constraints)
        parallel = PuzzlePipeline(sample_dictionary, workers=2).generate_puzzle_set(open_constraints)

        assert store.dumps(parallel["puzzle_set"]) == store.dumps(sequential["puzzle_set"])

    def test_seen_signatures_exclude_earlier_puzzles(self, pipeline, open_constraints):
        """Test chaining two passes through the signature set."""
        constraints = open_constraints.model_copy(update={"target_puzzle_count": 4})
        first = pipeline.generate_puzzle_set(constraints)
        second = pipeline.generate_puzzle_set(constraints, first["seen_signatures"])

        first_letters = {tuple(p.letters) for p in first["puzzle_set"]}
        second_letters = {tuple(p.letters) for p in second["puzzle_set"]}
        assert len(second_letters) == 4
        assert first_letters.isdisjoint(second_letters)
        assert len(second["seen_signatures"]) == 8

    @patch("letterhive.engine.candidate_builder.CandidateBuilder.process")
    def test_pipeline_failure_is_counted_and_raised(self, mock_build, pipeline, open_constraints):
        """Test that stage errors propagate after updating stats."""
        mock_build.side_effect = RuntimeError("worker crashed")

        with pytest.raises(RuntimeError):
            pipeline.generate_puzzle_set(open_constraints)

        assert pipeline.stats["total_runs"] == 1
        assert pipeline.stats["successful_runs"] == 0
        assert pipeline.stats["failed_runs"] == 1

    def test_get_status(self, pipeline, open_constraints):
        """Test getting pipeline status."""
        pipeline.generate_puzzle_set(open_constraints)

        status = pipeline.get_status()

        assert status["pipeline_status"] == "operational"
        assert status["dictionary_size"] == len(pipeline.dictionary)
        assert status["stages"]["enumerator"]["statistics"]["bases"] == 2
        assert status["stages"]["builder"]["statistics"]["candidates"] == 14
        assert "configuration" in status

    def test_update_stats(self, pipeline):
        """Test stats updating."""
        pipeline._update_stats(success=True, processing_time=30.5, puzzle_count=10)

        assert pipeline.stats["total_runs"] == 1
        assert pipeline.stats["successful_runs"] == 1
        assert pipeline.stats["average_processing_time"] == 30.5
        assert pipeline.stats["last_generation_time"] is not None

    def test_validate_puzzle_set(self, pipeline, open_constraints):
        """Test that a generated set passes its own quality checks."""
        puzzle_set = pipeline.generate_puzzle_set(open_constraints)["puzzle_set"]

        report = pipeline.validate_puzzle_set(puzzle_set, open_constraints)

        assert report.is_valid is True
        assert report.issues == []
        assert report.puzzle_count == 14


class TestQualityChecks:
    """Tests for check_puzzle_set."""

    @pytest.fixture
    def constraints(self):
        return GenerationConstraints(
            min_words=2, max_words=3, min_pangrams_per_puzzle=1, target_average_score=20
        )

    def make_set(self, *puzzles):
        return PuzzleSet(puzzles={p.id: p for p in puzzles})

    def test_valid_set(self, sample_dictionary, constraints):
        """Test a set meeting every property."""
        puzzle_set = self.make_set(
            Puzzle(id=0, letters=list("beatsnr"), words=["banters", "beast"], max_score=19)
        )

        report = check_puzzle_set(puzzle_set, sample_dictionary, constraints, tolerance=5)

        assert report.is_valid is True
        assert report.average_score == 19
        assert report.warnings == []

    def test_reports_each_violation(self, sample_dictionary, constraints):
        """Test that every broken property is reported."""
        puzzle_set = self.make_set(
            # Too few words and no pangram
            Puzzle(id=0, letters=list("beatsnr"), words=["beast"], max_score=5),
            # Wrong score and a word missing from the dictionary
            Puzzle(id=1, letters=list("abenrst"), words=["banter", "banters"], max_score=1),
            # Same center and letters as puzzle 0
            Puzzle(id=2, letters=list("bnrstae"), words=["banters", "beats"], max_score=19),
        )

        report = check_puzzle_set(puzzle_set, sample_dictionary, constraints)

        assert report.is_valid is False
        joined = "\n".join(report.issues)
        assert "Puzzle 0 (beatsnr) has 1 words" in joined
        assert "Puzzle 0 (beatsnr) has fewer than 1 pangrams" in joined
        assert "'banter' is not in the dictionary" in joined
        assert "Puzzle 1 (abenrst) maxScore is 1" in joined
        assert "repeats the letters of puzzle 0" in joined

    def test_average_outside_tolerance_warns(self, sample_dictionary, constraints):
        """Test that the average score is a warning, not an issue."""
        puzzle_set = self.make_set(
            Puzzle(id=0, letters=list("beatsnr"), words=["banters", "beast"], max_score=19)
        )

        report = check_puzzle_set(
            puzzle_set, sample_dictionary, constraints.model_copy(update={"target_average_score": 250}),
            tolerance=15
        )

        assert report.is_valid is True
        assert len(report.warnings) == 1
        assert "outside 250" in report.warnings[0]

    def test_empty_set_warns(self, sample_dictionary, constraints):
        """Test that an empty set is flagged for review."""
        report = check_puzzle_set(PuzzleSet(), sample_dictionary, constraints, tolerance=15)

        assert report.is_valid is True
        assert report.warnings == ["Puzzle set is empty"]
