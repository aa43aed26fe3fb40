"""Deterministic confidence from retrieval signals."""

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from ..models.confidence import ConfidenceLevel, ConfidenceResult, ConfidenceSignals
from ..models.document import Corpus

logger = logging.getLogger(__name__)


class RankedItem(Protocol):
    """Anything ranked that carries a score and a corpus."""

    @property
    def score(self) -> float: ...

    @property
    def corpus(self) -> Corpus: ...


@dataclass(frozen=True)
class ConfidenceThresholds:
    """Classification policy.

    Rules, in order:
        no results                                     -> low
        gap < low_gap and top < low_top_score          -> low
        gap > high_gap or top > high_top_score         -> high
        otherwise                                      -> medium
    """
    low_gap: float = 0.5
    low_top_score: float = 1.0
    high_gap: float = 3.0
    high_top_score: float = 6.0


DEFAULT_THRESHOLDS = ConfidenceThresholds()


def compute_signals(results: Sequence[RankedItem]) -> ConfidenceSignals:
    top_score = results[0].score if results else 0.0
    second_score = results[1].score if len(results) > 1 else 0.0

    top3 = results[:3]
    avg_top3 = sum(r.score for r in top3) / len(top3) if top3 else 0.0

    return ConfidenceSignals(
        top_score=top_score,
        second_score=second_score,
        score_gap=top_score - second_score,
        docs_count=sum(1 for r in results if r.corpus is Corpus.DOCS),
        kb_count=sum(1 for r in results if r.corpus is Corpus.KB),
        has_docs_top1=bool(results) and results[0].corpus is Corpus.DOCS,
        result_count=len(results),
        avg_top3_score=avg_top3,
    )


def classify(
    signals: ConfidenceSignals, thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS
) -> ConfidenceLevel:
    if signals.result_count == 0:
        return ConfidenceLevel.LOW

    if signals.score_gap < thresholds.low_gap and signals.top_score < thresholds.low_top_score:
        return ConfidenceLevel.LOW

    if signals.score_gap > thresholds.high_gap or signals.top_score > thresholds.high_top_score:
        return ConfidenceLevel.HIGH

    return ConfidenceLevel.MEDIUM


def estimate_confidence(
    results: Sequence[RankedItem],
    thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
) -> ConfidenceResult:
    """Confidence level and signals for a ranked result list."""
    signals = compute_signals(results)
    level = classify(signals, thresholds)

    logger.info(
        f"Confidence: {level.value} (top={signals.top_score:.2f}, "
        f"gap={signals.score_gap:.2f}, results={signals.result_count})"
    )
    return ConfidenceResult(level=level, signals=signals)


def meets_confidence_threshold(actual: ConfidenceLevel, minimum: ConfidenceLevel) -> bool:
    return actual.rank >= minimum.rank
