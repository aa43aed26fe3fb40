"""Tests for answer planning, citation parsing and ticket drafts."""

from verbatim.core.models import (
    AnswerMode,
    Chunk,
    ConfidenceLevel,
    Corpus,
    Document,
    SearchDebug,
    SearchResponse,
)
from verbatim.core.services.answer_service import (
    NO_SOURCES_ANSWER,
    AnswerService,
    extract_citations_from_answer,
    format_sources,
    generate_fallback_answer,
)
from verbatim.core.services.search_service import to_search_result
from verbatim.core.services.ticket_draft import (
    format_ticket_draft_as_text,
    generate_suggested_next_info,
    generate_summary,
    generate_ticket_draft,
    generate_title,
)
from tests.conftest import WORKSPACE, make_candidate


class TestPlan:
    """Mode selection."""

    def test_confident_question_answers(self, indexed, answer_service):
        plan = answer_service.plan("webhook signature verification")

        assert plan.confidence is ConfidenceLevel.HIGH
        assert plan.mode is AnswerMode.ANSWER
        assert plan.ticket_draft is None
        assert plan.sources.startswith(
            "[1] [Docs] /guides/webhooks#signature-verification\n"
            "Heading: Webhooks > Signature verification\n"
            "Content:\n"
        )
        assert plan.citations[0].url == "/guides/webhooks#signature-verification"
        assert plan.fallback_answer.startswith("Based on the available documentation")

    def test_no_sources_drafts_ticket(self, indexed, answer_service):
        plan = answer_service.plan("zebra quantum")

        assert plan.mode is AnswerMode.TICKET_DRAFT
        assert plan.confidence is ConfidenceLevel.LOW
        assert plan.fallback_answer == NO_SOURCES_ANSWER
        assert plan.citations == []
        assert plan.ticket_draft.citations == []
        assert "No relevant documentation was found for this query." in plan.ticket_draft.summary

    def test_forced_ticket_draft(self, indexed, answer_service):
        plan = answer_service.plan("webhook signature verification", force_ticket_draft=True)

        assert plan.mode is AnswerMode.TICKET_DRAFT
        assert plan.ticket_draft is not None
        assert plan.ticket_draft.citations == plan.citations
        assert plan.fallback_answer.startswith("I found some potentially relevant information")

    def test_min_confidence_met(self, indexed, answer_service):
        plan = answer_service.plan("webhook signature verification", min_confidence=ConfidenceLevel.HIGH)
        assert plan.mode is AnswerMode.ANSWER

    def test_low_confidence_drafts_ticket(self, store, answer_service):
        """Test weak, tied matches in long chunks fall back to a ticket draft."""
        for name in ("a", "b"):
            document = Document(
                workspace_id=WORKSPACE,
                canonical_id=f"kb:{name}.md",
                corpus=Corpus.KB,
                source_path=f"{name}.md",
                title=name.upper(),
                content_hash=name,
            )
            content = "zebra " + "x" * 3994
            store.replace_document(document, [Chunk([], None, content, 0)])

        plan = answer_service.plan("zebra")

        assert plan.confidence is ConfidenceLevel.LOW
        assert plan.mode is AnswerMode.TICKET_DRAFT
        assert plan.ticket_draft.suggested_next_info[0] == "Check KB article: A"

    def test_apply_answer(self, indexed, answer_service):
        plan = answer_service.plan("webhook signature verification")
        applied = answer_service.apply_answer(plan, "Verify the HMAC header [1].")

        assert applied.answer == "Verify the HMAC header [1]."
        assert [c.index for c in applied.citations] == [1]

        untagged = answer_service.apply_answer(plan, "Verify the HMAC header.")
        assert [c.index for c in untagged.citations] == [c.index for c in plan.citations]

    def test_apply_answer_records_attempt_in_ticket(self, indexed, answer_service):
        plan = answer_service.plan("webhook signature verification", force_ticket_draft=True)
        applied = answer_service.apply_answer(plan, "Not sure [1].")
        assert applied.ticket_draft.attempted_answer == "Not sure [1]."

    def test_confidence_uses_unrounded_scores(self):
        """Test a gap just over the high threshold is not lost to display rounding."""
        top = make_candidate("a", score=3.004)

        class FixedSearch:
            def search(self, question, top_k=None, corpus_scope=None):
                return SearchResponse(
                    chunks=[top],
                    results=[to_search_result(top)],
                    suggested_routes=[],
                    debug=SearchDebug("keyword", 1, 6, ["docs", "kb"]),
                )

        plan = AnswerService(search_service=FixedSearch()).plan("anything")

        assert plan.search.results[0].score == 3.0
        assert plan.signals.score_gap == 3.004
        assert plan.confidence is ConfidenceLevel.HIGH


class TestAnswerHelpers:

    def test_extract_citations(self):
        chunks = [
            make_candidate("a", route="/a", anchor="x", score=2.0),
            make_candidate("b", corpus=Corpus.KB, source_path="faq/b.md", score=1.0),
        ]
        citations = extract_citations_from_answer("See [2] and [1], also [2] and [9] or [0].", chunks)

        assert [c.index for c in citations] == [1, 2]
        assert citations[0].url == "/a#x"
        assert citations[1].corpus is Corpus.KB
        assert citations[1].source_path == "faq/b.md"
        assert citations[1].url is None

    def test_format_sources(self):
        chunks = [
            make_candidate("body", corpus=Corpus.KB, source_path="faq/a.md", heading_path=["FAQ", "Steps"], score=1.0),
            make_candidate("text", route="/guide", score=0.5),
        ]
        assert format_sources(chunks) == (
            "[1] [KB] faq/a.md\nHeading: FAQ > Steps\nContent:\nbody\n"
            "\n---\n"
            "[2] [Docs] /guide\nHeading: No heading\nContent:\ntext\n"
        )

    def test_format_sources_truncates(self):
        chunks = [make_candidate("y" * 50, score=1.0)]
        assert "y" * 10 + "...\n" in format_sources(chunks, max_chars=10)

    def test_fallback_answer(self):
        kb = [make_candidate("a", corpus=Corpus.KB, source_path="faq/a.md", score=1.0)]
        assert generate_fallback_answer([], AnswerMode.ANSWER) == NO_SOURCES_ANSWER
        assert "at faq/a.md [1]" in generate_fallback_answer(kb, AnswerMode.TICKET_DRAFT)


class TestTicketDraft:

    def test_title(self):
        assert generate_title("  how do I refund a payment??  ") == "How do I refund a payment"

    def test_long_title_truncated(self):
        title = generate_title("why " * 40)
        assert len(title) <= 80
        assert title.endswith("...")

    def test_keyword_suggestions_capped(self):
        chunks = [make_candidate("x", route="/payments", score=3.0)]
        suggestions = generate_suggested_next_info("payment error when I configure webhooks", chunks)

        assert len(suggestions) == 5
        assert suggestions[0] == "Ask for specific error messages or codes"
        assert "Review related documentation at /payments" not in suggestions

    def test_generic_suggestions(self):
        suggestions = generate_suggested_next_info("hello", [])
        assert suggestions == [
            "Gather more context about the specific use case",
            "Verify account and workspace settings",
            "Check for any recent configuration changes",
        ]

    def test_summary_counts(self):
        chunks = [
            make_candidate("a", score=2.0),
            make_candidate("b", corpus=Corpus.KB, score=1.0),
        ]
        summary = generate_summary("question", chunks)
        assert summary[1] == "Found 1 docs section(s) and 1 KB article(s) that may be related."
        assert summary[2] == "No automated response was generated due to low confidence."

    def test_format_as_text(self):
        chunks = [
            make_candidate("a", route="/a", anchor="b", score=2.0),
            make_candidate("b", corpus=Corpus.KB, source_path="faq/b.md", score=1.0),
        ]
        draft = generate_ticket_draft("refund failed?", chunks, answer="Try again [1].")
        text = format_ticket_draft_as_text(draft)

        assert text.startswith("Title: Refund failed\n\nSummary:\n  - User asked:")
        assert "Attempted Answer:\nTry again [1]." in text
        assert "  [1] /a#b" in text
        assert "  [2] KB: faq/b.md" in text
