"""Rank stored chunks for a query."""

import logging
from typing import Iterable, Optional

from ..models.document import ScoredCandidate, StoredChunk
from ..models.query import TokenizedQuery
from .scoring import LexicalScorer

logger = logging.getLogger(__name__)


def rank(
    candidates: Iterable[StoredChunk],
    query: TokenizedQuery,
    top_k: int,
    scorer: Optional[LexicalScorer] = None,
) -> list[ScoredCandidate]:
    """Score, filter and sort candidates.

    An empty term set short-circuits to no results. Zero-scoring candidates
    are dropped; ties keep candidate order.
    """
    if query.is_empty or top_k <= 0:
        return []

    scorer = scorer or LexicalScorer()
    terms = sorted(query.terms)

    scored = []
    for candidate in candidates:
        value = scorer.score(candidate.content, candidate.heading_path, terms, query.phrases)
        if value > 0:
            scored.append(ScoredCandidate(chunk=candidate, score=value))

    scored.sort(key=lambda c: c.score, reverse=True)

    logger.debug(f"Rank: {len(scored)} matching candidates, returning top {top_k}")
    return scored[:top_k]
