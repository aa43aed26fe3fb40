"""Deterministic support ticket drafts.

Built from retrieval results alone when confidence is low or a draft is
explicitly requested.
"""

import re
from typing import Optional, Sequence

from ..ingestion import build_citation_url
from ..models.answer import AnswerCitation, TicketDraft
from ..models.document import Corpus, ScoredCandidate

TITLE_MAX_CHARS = 80
MAX_SUGGESTIONS = 5
FALLBACK_CITATION_COUNT = 3

_KEYWORD_SUGGESTIONS = (
    (
        ("error", "fail", "not working"),
        (
            "Ask for specific error messages or codes",
            "Request steps to reproduce the issue",
        ),
    ),
    (
        ("setup", "configure", "integration"),
        (
            "Confirm environment (sandbox vs production)",
            "Request API version and SDK details if applicable",
        ),
    ),
    (
        ("payment", "transaction"),
        (
            "Ask for transaction ID or reference number",
            "Confirm merchant account status",
        ),
    ),
)

_GENERIC_SUGGESTIONS = (
    "Gather more context about the specific use case",
    "Verify account and workspace settings",
    "Check for any recent configuration changes",
)


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def citation_for(candidate: ScoredCandidate, index: int) -> AnswerCitation:
    chunk = candidate.chunk
    if chunk.corpus is Corpus.DOCS:
        route = chunk.route or "/"
        return AnswerCitation(
            index=index,
            corpus=Corpus.DOCS,
            route=route,
            anchor=chunk.anchor,
            url=build_citation_url(route, chunk.anchor),
        )
    return AnswerCitation(index=index, corpus=Corpus.KB, source_path=chunk.source_path)


def fallback_citations(chunks: Sequence[ScoredCandidate]) -> list[AnswerCitation]:
    """Citations for the top chunks, numbered from 1."""
    return [citation_for(c, i) for i, c in enumerate(chunks[:FALLBACK_CITATION_COUNT], 1)]


def generate_title(question: str) -> str:
    title = re.sub(r"[?!.]+$", "", question.strip())
    title = title[:1].upper() + title[1:]
    return truncate(title, TITLE_MAX_CHARS)


def generate_summary(
    question: str, chunks: Sequence[ScoredCandidate], answer: Optional[str] = None
) -> list[str]:
    summary = [f'User asked: "{truncate(question, 100)}"']

    if not chunks:
        summary.append("No relevant documentation was found for this query.")
    else:
        docs_count = sum(1 for c in chunks if c.corpus is Corpus.DOCS)
        kb_count = sum(1 for c in chunks if c.corpus is Corpus.KB)

        if docs_count and kb_count:
            summary.append(
                f"Found {docs_count} docs section(s) and {kb_count} KB article(s) "
                f"that may be related."
            )
        elif docs_count:
            summary.append(f"Found {docs_count} docs section(s) that may be related.")
        elif kb_count:
            summary.append(f"Found {kb_count} KB article(s) that may be related.")

    if answer:
        summary.append(f'Automated response attempted: "{truncate(answer, 150)}"')
    else:
        summary.append("No automated response was generated due to low confidence.")

    summary.append(
        "This ticket was created because the system could not confidently answer the question."
    )
    return summary


def generate_suggested_next_info(question: str, chunks: Sequence[ScoredCandidate]) -> list[str]:
    question_lower = question.lower()
    suggestions = []

    for keywords, advice in _KEYWORD_SUGGESTIONS:
        if any(keyword in question_lower for keyword in keywords):
            suggestions.extend(advice)

    if chunks:
        top = chunks[0].chunk
        if top.corpus is Corpus.DOCS and top.route:
            suggestions.append(f"Review related documentation at {top.route}")
        if top.corpus is Corpus.KB:
            suggestions.append(f"Check KB article: {top.title or top.source_path}")

    if len(suggestions) < 3:
        suggestions.extend(_GENERIC_SUGGESTIONS)

    return suggestions[:MAX_SUGGESTIONS]


def generate_ticket_draft(
    question: str,
    chunks: Sequence[ScoredCandidate],
    answer: Optional[str] = None,
    citations: Optional[list[AnswerCitation]] = None,
) -> TicketDraft:
    """Build a ticket draft; falls back to top-chunk citations when none are given."""
    return TicketDraft(
        title=generate_title(question),
        summary=generate_summary(question, chunks, answer),
        user_question=question,
        suggested_next_info=generate_suggested_next_info(question, chunks),
        citations=citations or fallback_citations(chunks),
        attempted_answer=answer,
    )


def format_ticket_draft_as_text(draft: TicketDraft) -> str:
    """Plain-text rendering for copying into a ticketing system."""
    lines = [f"Title: {draft.title}", "", "Summary:"]
    lines.extend(f"  - {point}" for point in draft.summary)
    lines.extend(["", f"Original Question: {draft.user_question}"])

    if draft.attempted_answer:
        lines.extend(["", "Attempted Answer:", draft.attempted_answer])

    lines.extend(["", "Suggested Next Steps:"])
    lines.extend(f"  - {point}" for point in draft.suggested_next_info)

    if draft.citations:
        lines.extend(["", "Related Documentation:"])
        for citation in draft.citations:
            if citation.corpus is Corpus.DOCS:
                lines.append(f"  [{citation.index}] {citation.url}")
            else:
                lines.append(f"  [{citation.index}] KB: {citation.source_path}")

    return "\n".join(lines)
