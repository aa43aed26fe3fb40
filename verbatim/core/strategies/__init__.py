"""Tokenizing, scoring, ranking and confidence strategies."""
from .confidence import (
    ConfidenceThresholds,
    estimate_confidence,
    meets_confidence_threshold,
)
from .ranking import rank
from .scoring import LexicalScorer, ScoringWeights, score
from .tokenizer import normalize_plural, tokenize

__all__ = [
    "ConfidenceThresholds",
    "estimate_confidence",
    "meets_confidence_threshold",
    "rank",
    "LexicalScorer",
    "ScoringWeights",
    "score",
    "normalize_plural",
    "tokenize",
]
