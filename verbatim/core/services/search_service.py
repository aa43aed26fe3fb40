"""Search service - keyword retrieval over stored chunks."""

import logging
from typing import Iterable, Optional

from ..ingestion import build_citation_url, parse_corpus
from ..models.document import (
    Citation,
    Corpus,
    DocsCitation,
    KbCitation,
    ScoredCandidate,
    SearchDebug,
    SearchResponse,
    SearchResult,
    StoredChunk,
    SuggestedRoute,
)
from ..protocols.document_store import DocumentStoreProtocol
from ..strategies.ranking import rank
from ..strategies.scoring import LexicalScorer
from ..strategies.tokenizer import tokenize

logger = logging.getLogger(__name__)

RETRIEVAL_MODE = "keyword"
ALL_CORPORA = (Corpus.DOCS, Corpus.KB)


def build_citation(chunk: StoredChunk) -> Citation:
    """Docs chunks get a linkable url; KB chunks only their source path."""
    if chunk.corpus is Corpus.DOCS:
        route = chunk.route or "/"
        return DocsCitation(
            route=route, anchor=chunk.anchor, url=build_citation_url(route, chunk.anchor)
        )
    return KbCitation(source_path=chunk.source_path)


def build_excerpt(content: str, max_length: int = 400) -> str:
    """Leading excerpt, cut at a sentence or word boundary past the half-point."""
    if len(content) <= max_length:
        return content

    break_point = content.rfind(". ", 0, max_length + 2)
    if break_point < max_length / 2:
        break_point = content.rfind(" ", 0, max_length + 1)
    if break_point < max_length / 2:
        break_point = max_length

    return content[:break_point].strip() + "..."


def to_search_result(candidate: ScoredCandidate, excerpt_max_chars: int = 400) -> SearchResult:
    chunk = candidate.chunk
    return SearchResult(
        corpus=chunk.corpus,
        canonical_id=chunk.canonical_id,
        heading_path=list(chunk.heading_path),
        score=round(candidate.score, 2),
        citation=build_citation(chunk),
        excerpt=build_excerpt(chunk.content, excerpt_max_chars),
    )


def extract_suggested_routes(
    ranked: Iterable[ScoredCandidate], max_count: int = 5
) -> list[SuggestedRoute]:
    """Unique docs routes in rank order; KB has no routes."""
    seen = set()
    routes = []

    for candidate in ranked:
        chunk = candidate.chunk
        if chunk.corpus is not Corpus.DOCS or not chunk.route:
            continue
        if chunk.route in seen:
            continue

        seen.add(chunk.route)
        routes.append(SuggestedRoute(route=chunk.route, title=chunk.title))
        if len(routes) >= max_count:
            break

    return routes


class SearchService:
    """Keyword search over one workspace."""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        workspace_id: str = "default",
        top_k: int = 6,
        excerpt_max_chars: int = 400,
        max_suggested_routes: int = 5,
        scorer: Optional[LexicalScorer] = None,
    ):
        """Initialize search service.

        Args:
            store: Source of candidate chunks.
            workspace_id: Workspace to search.
            top_k: Default number of results.
            excerpt_max_chars: Excerpt length in results.
            max_suggested_routes: Cap on suggested docs routes.
            scorer: Scorer with custom weights.
        """
        self._store = store
        self._workspace_id = workspace_id
        self._top_k = top_k
        self._excerpt_max_chars = excerpt_max_chars
        self._max_suggested_routes = max_suggested_routes
        self._scorer = scorer or LexicalScorer()

    def search(
        self,
        question: str,
        top_k: Optional[int] = None,
        corpus_scope: Optional[Iterable[str | Corpus]] = None,
    ) -> SearchResponse:
        """Search documents.

        Args:
            question: Free-text query; quoted parts are phrases.
            top_k: Override number of results.
            corpus_scope: Corpora to search; None means all.

        Returns:
            Ranked chunks, presentation results, suggested routes and debug info.
        """
        top_k = top_k or self._top_k
        corpora = [parse_corpus(c) for c in corpus_scope] if corpus_scope else list(ALL_CORPORA)

        candidates = self._store.list_candidates(self._workspace_id, corpora)
        query = tokenize(question)
        ranked = rank(candidates, query, top_k, self._scorer)

        logger.info(
            f"Search: returned {len(ranked)}/{top_k} chunks from {len(candidates)} "
            f"for '{question[:50]}'"
        )

        return SearchResponse(
            chunks=ranked,
            results=[to_search_result(c, self._excerpt_max_chars) for c in ranked],
            suggested_routes=extract_suggested_routes(ranked, self._max_suggested_routes),
            debug=SearchDebug(
                retrieval_mode=RETRIEVAL_MODE,
                total_chunks_scanned=len(candidates),
                top_k=top_k,
                corpus_scope=[c.value for c in corpora],
            ),
        )
