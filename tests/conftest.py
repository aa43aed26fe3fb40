"""
Shared test fixtures.

Provides: in-memory store, loader, wired services, and a small docs/KB corpus
written to a temporary directory.
"""

from pathlib import Path

import pytest

from verbatim.core.models import Chunk, Corpus, ScoredCandidate, StoredChunk
from verbatim.core.services.answer_service import AnswerService
from verbatim.core.services.ingest_service import IngestService
from verbatim.core.services.search_service import SearchService
from verbatim.infrastructure.document_loaders import CompositeLoader
from verbatim.infrastructure.stores.memory_store import InMemoryDocumentStore

WORKSPACE = "test-workspace"

ROOT_PAGE = """---
title: Welcome
---
import { Callout } from "@/components/callout"

# Getting Started

Intro paragraph about the platform.

<Callout type="info">
  Remember to read the quickstart.

  It spans paragraphs.
</Callout>

## Install

Run the installer to setup the SDK.
"""

WEBHOOKS_PAGE = """# Webhooks

Webhooks deliver events to your endpoint.

## Retries

Failed webhook deliveries are retried with exponential backoff up to 5 times.

## Signature verification

Every webhook request carries an HMAC signature header.
"""

TIMEOUTS_ARTICLE = """# Handling timeouts

If a request times out, retry the request with backoff.

## Gateway limits

The gateway closes idle connections after 30 seconds.
"""

CORPUS_FILES = {
    "docs/page.mdx": ROOT_PAGE,
    "docs/guides/webhooks/page.mdx": WEBHOOKS_PAGE,
    "docs/notes.md": "# Notes\n\nNot a routed page.\n",
    "kb/troubleshooting/timeouts.md": TIMEOUTS_ARTICLE,
}


def make_candidate(
    content: str,
    heading_path=None,
    corpus: Corpus = Corpus.DOCS,
    route: str | None = "/guide",
    anchor: str | None = None,
    source_path: str = "guide/page.mdx",
    title: str | None = "Guide",
    score: float | None = None,
    chunk_index: int = 0,
):
    """StoredChunk, or ScoredCandidate when a score is given."""
    if corpus is Corpus.KB:
        route = None
    stored = StoredChunk(
        chunk=Chunk(
            heading_path=list(heading_path or []),
            anchor=anchor,
            content=content,
            chunk_index=chunk_index,
        ),
        canonical_id=f"{corpus.value}:{route or source_path}",
        corpus=corpus,
        source_path=source_path,
        route=route,
        title=title,
    )
    if score is None:
        return stored
    return ScoredCandidate(chunk=stored, score=score)


@pytest.fixture
def corpus_root(tmp_path) -> Path:
    """Docs and KB trees on disk."""
    for relative, text in CORPUS_FILES.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return tmp_path


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def loader() -> CompositeLoader:
    return CompositeLoader()


@pytest.fixture
def ingest_service(store, loader, corpus_root) -> IngestService:
    return IngestService(
        store=store,
        loader=loader,
        workspace_id=WORKSPACE,
        docs_path=str(corpus_root / "docs"),
        kb_path=str(corpus_root / "kb"),
    )


@pytest.fixture
def search_service(store) -> SearchService:
    return SearchService(store=store, workspace_id=WORKSPACE)


@pytest.fixture
def answer_service(search_service) -> AnswerService:
    return AnswerService(search_service=search_service)


@pytest.fixture
def indexed(ingest_service):
    """Run ingestion over the sample corpus and return the report."""
    return ingest_service.run()
