"""Deterministic lexical scoring of chunks against a tokenized query.

Factors:
- term frequency in content
- term presence in the heading path
- exact phrase matches in heading and content
- proximity bonus for distinct terms close together
- sqrt length normalization with a floor for tiny chunks
"""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class ScoringWeights:
    """Tunable scoring constants."""
    content_term: float = 1.0
    heading_term: float = 2.5
    phrase_content: float = 3.0
    phrase_heading: float = 4.0
    proximity_bonus: float = 0.5
    proximity_window: int = 30
    min_length_for_normalization: int = 100


DEFAULT_WEIGHTS = ScoringWeights()


def find_positions(text: str, term: str) -> list[int]:
    """Start offsets of non-overlapping occurrences of term in text."""
    positions = []
    if not term:
        return positions
    pos = text.find(term)
    while pos != -1:
        positions.append(pos)
        pos = text.find(term, pos + len(term))
    return positions


def count_occurrences(text: str, term: str) -> int:
    return len(find_positions(text, term))


class LexicalScorer:
    """Scores chunk content and heading path against query terms."""

    def __init__(self, weights: ScoringWeights = DEFAULT_WEIGHTS):
        self._weights = weights

    @property
    def weights(self) -> ScoringWeights:
        return self._weights

    def score_content_terms(self, content_lower: str, terms: Iterable[str]) -> float:
        return sum(
            count_occurrences(content_lower, term) * self._weights.content_term
            for term in terms
        )

    def score_heading_terms(self, heading_lower: str, terms: Iterable[str]) -> float:
        """Once per term present in the heading, not per occurrence."""
        return sum(self._weights.heading_term for term in terms if term in heading_lower)

    def score_phrases(
        self, content_lower: str, heading_lower: str, phrases: Iterable[str]
    ) -> float:
        score = 0.0
        for phrase in phrases:
            if phrase in heading_lower:
                score += self._weights.phrase_heading
            score += count_occurrences(content_lower, phrase) * self._weights.phrase_content
        return score

    def score_proximity(self, content_lower: str, terms: Iterable[str]) -> float:
        """Bonus per occurrence pair of distinct terms within the window.

        Pairs are keyed by their positions so the same two occurrences are
        never counted twice.
        """
        term_positions = {}
        for term in terms:
            positions = find_positions(content_lower, term)
            if positions:
                term_positions[term] = positions

        matched = list(term_positions)
        if len(matched) < 2:
            return 0.0

        window = self._weights.proximity_window
        counted: set[tuple[int, int]] = set()

        for i, first in enumerate(matched):
            for second in matched[i + 1:]:
                for pos1 in term_positions[first]:
                    for pos2 in term_positions[second]:
                        if abs(pos1 - pos2) <= window:
                            counted.add((min(pos1, pos2), max(pos1, pos2)))

        return len(counted) * self._weights.proximity_bonus

    def normalize(self, raw_score: float, content_length: int) -> float:
        """Divide by sqrt(effective_length / 1000); zero stays zero."""
        if raw_score == 0:
            return 0.0
        effective = max(content_length, self._weights.min_length_for_normalization)
        return raw_score / math.sqrt(effective / 1000)

    def score(
        self,
        content: str,
        heading_path: Sequence[str],
        terms: Iterable[str],
        phrases: Iterable[str] = (),
    ) -> float:
        """Score one chunk.

        Args:
            content: Chunk text.
            heading_path: Breadcrumb of the chunk.
            terms: Tokenized query terms.
            phrases: Quoted query phrases.

        Returns:
            Length-normalized score, >= 0.
        """
        terms = list(terms)
        content_lower = content.lower()
        heading_lower = " ".join(heading_path).lower()

        total = (
            self.score_content_terms(content_lower, terms)
            + self.score_heading_terms(heading_lower, terms)
            + self.score_phrases(content_lower, heading_lower, phrases)
            + self.score_proximity(content_lower, terms)
        )
        return self.normalize(total, len(content))


_default_scorer = LexicalScorer()


def score(
    content: str,
    heading_path: Sequence[str],
    terms: Iterable[str],
    phrases: Iterable[str] = (),
) -> float:
    """Score one chunk with the default weights."""
    return _default_scorer.score(content, heading_path, terms, phrases)
