"""Confidence domain models."""
from dataclasses import asdict, dataclass
from enum import Enum


class ConfidenceLevel(Enum):
    """Confidence level for a ranked result set."""
    HIGH = "high"      # answer directly
    MEDIUM = "medium"  # answer, caller may ask for confirmation
    LOW = "low"        # escalate to a ticket draft

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]


_LEVEL_RANK = {
    ConfidenceLevel.LOW: 0,
    ConfidenceLevel.MEDIUM: 1,
    ConfidenceLevel.HIGH: 2,
}


@dataclass(frozen=True)
class ConfidenceSignals:
    """Signals derived from a ranked result set. Never persisted."""
    top_score: float
    second_score: float
    score_gap: float
    docs_count: int
    kb_count: int
    has_docs_top1: bool
    result_count: int
    avg_top3_score: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ConfidenceResult:
    """Confidence level with the signals it was derived from."""
    level: ConfidenceLevel
    signals: ConfidenceSignals
