"""Tests for lexical scoring."""

import math

import pytest

from verbatim.core.strategies.scoring import (
    LexicalScorer,
    ScoringWeights,
    count_occurrences,
    find_positions,
    score,
)


class TestOccurrences:

    def test_non_overlapping(self):
        assert count_occurrences("aaaa", "aa") == 2
        assert find_positions("aaaa", "aa") == [0, 2]

    def test_empty_term(self):
        assert count_occurrences("text", "") == 0


class TestScore:
    """Score composition and normalization."""

    def test_no_match_is_exactly_zero(self):
        assert score("nothing relevant here", ["Heading"], ["webhook"]) == 0.0

    def test_length_floor(self):
        """Test short chunks normalize as if they were 100 chars long."""
        assert score("webhook", [], ["webhook"]) == pytest.approx(1 / math.sqrt(0.1))

    def test_long_content_normalized_by_length(self):
        content = "webhook " + "x" * 3992
        assert score(content, [], ["webhook"]) == pytest.approx(1 / math.sqrt(4.0))

    def test_heading_match_increases_score(self):
        """Test adding a query term to the heading path never lowers the score."""
        content = "Deliveries are retried with backoff."
        without = score(content, ["Events"], ["retried", "webhook"])
        with_heading = score(content, ["Webhook events"], ["retried", "webhook"])
        assert with_heading > without

    def test_heading_counted_once_per_term(self):
        scorer = LexicalScorer()
        assert scorer.score_heading_terms("webhook webhook webhook", ["webhook"]) == 2.5

    def test_exact_phrase_dominates_scattered_terms(self):
        """Test a chunk holding the exact phrase beats one with the same terms apart."""
        terms = ["rate", "limit"]
        phrases = ["rate limit"]
        together = "the rate limit applies to every call"
        apart = "rate " + "x" * 40 + " limit"

        assert score(together, [], terms, phrases) > score(apart, [], terms, phrases)

    def test_proximity_pairs_deduplicated(self):
        scorer = LexicalScorer()
        assert scorer.score_proximity("rate limit", ["rate", "limit"]) == 0.5
        assert scorer.score_proximity("rate limit", ["rate"]) == 0.0

    def test_proximity_window(self):
        scorer = LexicalScorer()
        far = "rate" + " " * 40 + "limit"
        assert scorer.score_proximity(far, ["rate", "limit"]) == 0.0

    def test_phrase_in_heading(self):
        scorer = LexicalScorer()
        assert scorer.score_phrases("", "rate limit errors", ["rate limit"]) == 4.0

    def test_custom_weights(self):
        scorer = LexicalScorer(ScoringWeights(heading_term=0.0))
        assert scorer.score("unrelated", ["Webhook"], ["webhook"]) == 0.0
