"""Tests for search, citations, excerpts and suggested routes."""

from verbatim.core.models import Corpus, DocsCitation, KbCitation
from verbatim.core.services.search_service import (
    build_citation,
    build_excerpt,
    extract_suggested_routes,
)
from tests.conftest import WORKSPACE, make_candidate


class TestSearch:
    """End-to-end search over the sample corpus."""

    def test_best_section_first(self, indexed, search_service):
        response = search_service.search("webhook retries")
        top = response.results[0]

        assert top.canonical_id == "docs:/guides/webhooks"
        assert top.heading_path == ["Webhooks", "Retries"]
        assert top.citation == DocsCitation(
            route="/guides/webhooks", anchor="retries", url="/guides/webhooks#retries"
        )
        assert [r.score for r in response.results] == sorted(
            (r.score for r in response.results), reverse=True
        )

    def test_scores_rounded(self, indexed, search_service):
        for result in search_service.search("webhook retries").results:
            assert result.score == round(result.score, 2)

    def test_kb_results_cite_source_path(self, indexed, search_service):
        response = search_service.search("retry", corpus_scope=["kb"])

        assert response.results
        assert all(r.corpus is Corpus.KB for r in response.results)
        assert response.results[0].citation == KbCitation(source_path="troubleshooting/timeouts.md")
        assert response.suggested_routes == []
        assert response.debug.corpus_scope == ["kb"]

    def test_suggested_routes_unique(self, indexed, search_service):
        response = search_service.search("webhook retries signature")
        routes = [s.route for s in response.suggested_routes]

        assert routes == ["/guides/webhooks"]
        assert response.suggested_routes[0].title == "Webhooks"

    def test_empty_query(self, indexed, search_service, store):
        response = search_service.search("what is the")

        assert response.results == []
        assert response.chunks == []
        assert response.debug.retrieval_mode == "keyword"
        assert response.debug.total_chunks_scanned == store.count_chunks(WORKSPACE)

    def test_top_k(self, indexed, search_service):
        response = search_service.search("webhook retries", top_k=1)
        assert len(response.results) == 1
        assert response.debug.top_k == 1

    def test_other_workspace_invisible(self, indexed, store):
        from verbatim.core.services.search_service import SearchService

        other = SearchService(store=store, workspace_id="someone-else")
        assert other.search("webhook").results == []


class TestCitations:

    def test_docs_without_anchor(self):
        citation = build_citation(make_candidate("x", route="/guides", anchor=None))
        assert citation.url == "/guides"
        assert citation.corpus is Corpus.DOCS

    def test_kb(self):
        citation = build_citation(make_candidate("x", corpus=Corpus.KB, source_path="faq/a.md"))
        assert citation == KbCitation(source_path="faq/a.md")
        assert citation.corpus is Corpus.KB


class TestExcerpt:

    def test_short_content_unchanged(self):
        assert build_excerpt("short text") == "short text"

    def test_sentence_boundary(self):
        content = "A" * 300 + ". " + "B" * 300
        assert build_excerpt(content) == "A" * 300 + "..."

    def test_word_boundary(self):
        content = "word " * 100
        excerpt = build_excerpt(content)
        assert excerpt.endswith("word...")
        assert len(excerpt) <= 403

    def test_hard_cut(self):
        assert build_excerpt("x" * 1000) == "x" * 400 + "..."


def test_extract_suggested_routes_limit_and_kb_skipped():
    ranked = [make_candidate("x", corpus=Corpus.KB, score=9.0)] + [
        make_candidate("x", route=f"/r{i}", title=f"R{i}", score=5.0 - i) for i in range(7)
    ]
    routes = extract_suggested_routes(ranked, max_count=5)
    assert [r.route for r in routes] == ["/r0", "/r1", "/r2", "/r3", "/r4"]
