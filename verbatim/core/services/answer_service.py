"""Answer service - confidence gating and source context for answer generation.

The generation call itself lives outside this package. `plan` prepares
everything a generator needs (numbered sources, mode, fallbacks); a generated
text can be folded back in with `apply_answer`.
"""

import logging
import re
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..models.answer import AnswerCitation, AnswerMode, AnswerPlan
from ..models.confidence import ConfidenceLevel
from ..models.document import Corpus, ScoredCandidate
from ..strategies.confidence import (
    DEFAULT_THRESHOLDS,
    ConfidenceThresholds,
    estimate_confidence,
    meets_confidence_threshold,
)
from .search_service import SearchService
from .ticket_draft import citation_for, fallback_citations, generate_ticket_draft

logger = logging.getLogger(__name__)

NO_SOURCES_ANSWER = (
    "I couldn't find any relevant information in the documentation to answer your question."
)

_CITATION_TAG = re.compile(r"\[(\d+)\]")


def _location(candidate: ScoredCandidate) -> str:
    chunk = candidate.chunk
    if chunk.corpus is Corpus.DOCS:
        return chunk.route or "/"
    return chunk.source_path


def _truncate_source(content: str, max_chars: int) -> str:
    if len(content) <= max_chars:
        return content
    return content[:max_chars] + "..."


def format_sources(chunks: Sequence[ScoredCandidate], max_chars: int = 1200) -> str:
    """Numbered source blocks for a generation prompt.

    The number of each block is what `[n]` tags in a generated answer refer to.
    """
    parts = []
    for i, candidate in enumerate(chunks, 1):
        chunk = candidate.chunk
        if chunk.corpus is Corpus.DOCS:
            anchor = f"#{chunk.anchor}" if chunk.anchor else ""
            location = f"[Docs] {chunk.route or '/'}{anchor}"
        else:
            location = f"[KB] {chunk.source_path}"
        heading = " > ".join(chunk.heading_path) if chunk.heading_path else "No heading"
        content = _truncate_source(chunk.content, max_chars)

        parts.append(f"[{i}] {location}\nHeading: {heading}\nContent:\n{content}\n")

    return "\n---\n".join(parts)


def extract_citations_from_answer(
    answer: str, chunks: Sequence[ScoredCandidate]
) -> list[AnswerCitation]:
    """Citations for each distinct, in-range `[n]` tag, sorted by n."""
    indices = {int(n) for n in _CITATION_TAG.findall(answer)}
    return [
        citation_for(chunks[index - 1], index)
        for index in sorted(indices)
        if 1 <= index <= len(chunks)
    ]


def generate_fallback_answer(chunks: Sequence[ScoredCandidate], mode: AnswerMode) -> str:
    if not chunks:
        return NO_SOURCES_ANSWER

    location = _location(chunks[0])
    if mode is AnswerMode.TICKET_DRAFT:
        return (
            f"I found some potentially relevant information at {location} [1], but I wasn't "
            f"able to generate a complete answer. Please review the source or contact "
            f"support for more help."
        )
    return (
        f"Based on the available documentation, you may find relevant information at "
        f"{location} [1]. For a more detailed answer, please try again or consult the "
        f"documentation directly."
    )


class AnswerService:
    """Decides between answering and drafting a ticket."""

    def __init__(
        self,
        search_service: SearchService,
        thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
        max_sources: int = 6,
        max_source_chars: int = 1200,
    ):
        """Initialize answer service.

        Args:
            search_service: Retrieval.
            thresholds: Confidence classification policy.
            max_sources: Chunks included in the source context.
            max_source_chars: Per-source content cap in the source context.
        """
        self._search = search_service
        self._thresholds = thresholds
        self._max_sources = max_sources
        self._max_source_chars = max_source_chars

    def plan(
        self,
        question: str,
        force_ticket_draft: bool = False,
        min_confidence: Optional[ConfidenceLevel] = None,
        top_k: Optional[int] = None,
        corpus_scope: Optional[Iterable[str | Corpus]] = None,
    ) -> AnswerPlan:
        """Retrieve, estimate confidence and pick the answer mode.

        Args:
            question: User question.
            force_ticket_draft: Always produce a ticket draft.
            min_confidence: Below this level a ticket draft is produced.
            top_k: Override number of retrieved chunks.
            corpus_scope: Corpora to search.

        Returns:
            Answer plan.
        """
        response = self._search.search(question, top_k=top_k, corpus_scope=corpus_scope)
        confidence = estimate_confidence(response.chunks, self._thresholds)

        if not response.chunks:
            logger.info("Answer: no sources, drafting ticket")
            return AnswerPlan(
                question=question,
                confidence=ConfidenceLevel.LOW,
                signals=confidence.signals,
                mode=AnswerMode.TICKET_DRAFT,
                sources="",
                citations=[],
                fallback_answer=NO_SOURCES_ANSWER,
                suggested_routes=[],
                search=response,
                ticket_draft=generate_ticket_draft(question, [], citations=[]),
            )

        use_ticket_draft = (
            force_ticket_draft
            or confidence.level is ConfidenceLevel.LOW
            or (
                min_confidence is not None
                and not meets_confidence_threshold(confidence.level, min_confidence)
            )
        )
        mode = AnswerMode.TICKET_DRAFT if use_ticket_draft else AnswerMode.ANSWER
        citations = fallback_citations(response.chunks)

        logger.info(f"Answer: mode={mode.value}, confidence={confidence.level.value}")

        return AnswerPlan(
            question=question,
            confidence=confidence.level,
            signals=confidence.signals,
            mode=mode,
            sources=format_sources(response.chunks[: self._max_sources], self._max_source_chars),
            citations=citations,
            fallback_answer=generate_fallback_answer(response.chunks, mode),
            suggested_routes=response.suggested_routes,
            search=response,
            ticket_draft=(
                generate_ticket_draft(question, response.chunks, citations=citations)
                if mode is AnswerMode.TICKET_DRAFT
                else None
            ),
        )

    def apply_answer(self, plan: AnswerPlan, answer: str) -> AnswerPlan:
        """Fold a generated answer into a plan.

        Citations come from the answer's `[n]` tags, falling back to the top
        chunks when it has none. A ticket draft records the attempted answer.
        """
        cited = plan.search.chunks[: self._max_sources]
        citations = extract_citations_from_answer(answer, cited) or fallback_citations(cited)

        ticket_draft = plan.ticket_draft
        if plan.mode is AnswerMode.TICKET_DRAFT:
            ticket_draft = generate_ticket_draft(
                plan.question, plan.search.chunks, answer=answer, citations=citations
            )

        return replace(plan, answer=answer, citations=citations, ticket_draft=ticket_draft)
