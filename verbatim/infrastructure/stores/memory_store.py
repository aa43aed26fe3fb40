import logging
import threading
from dataclasses import replace
from typing import Iterable, Optional

from verbatim.core.models.document import Chunk, Corpus, Document, StoredChunk

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Process-local document store.

    Documents are keyed by (workspace_id, canonical_id). Every mutation swaps
    a document's chunk list under one lock, so readers never observe a
    half-replaced document.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._documents: dict[tuple[str, str], Document] = {}
        self._chunks: dict[tuple[str, str], list[Chunk]] = {}

    def get_document(self, workspace_id: str, canonical_id: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get((workspace_id, canonical_id))

    def replace_document(self, document: Document, chunks: list[Chunk]) -> None:
        key = (document.workspace_id, document.canonical_id)
        copied = [replace(c, heading_path=list(c.heading_path)) for c in chunks]

        with self._lock:
            self._documents[key] = document
            self._chunks[key] = copied

        logger.debug(f"Stored {document.canonical_id}: {len(copied)} chunks")

    def delete_document(self, workspace_id: str, canonical_id: str) -> bool:
        key = (workspace_id, canonical_id)
        with self._lock:
            removed = self._documents.pop(key, None)
            self._chunks.pop(key, None)

        if removed:
            logger.debug(f"Deleted {canonical_id}")
        return removed is not None

    def _selected(
        self, workspace_id: str, corpora: Optional[Iterable[Corpus]]
    ) -> list[tuple[Document, list[Chunk]]]:
        allowed = set(corpora) if corpora is not None else None
        selected = []
        for key in sorted(self._documents):
            document = self._documents[key]
            if key[0] != workspace_id:
                continue
            if allowed is not None and document.corpus not in allowed:
                continue
            selected.append((document, self._chunks.get(key, [])))
        return selected

    def list_candidates(
        self, workspace_id: str, corpora: Optional[Iterable[Corpus]] = None
    ) -> list[StoredChunk]:
        with self._lock:
            selected = self._selected(workspace_id, corpora)

        return [
            StoredChunk(
                chunk=chunk,
                canonical_id=document.canonical_id,
                corpus=document.corpus,
                source_path=document.source_path,
                route=document.route,
                title=document.title,
            )
            for document, chunks in selected
            for chunk in chunks
        ]

    def count_chunks(
        self, workspace_id: str, corpora: Optional[Iterable[Corpus]] = None
    ) -> int:
        with self._lock:
            return sum(len(chunks) for _, chunks in self._selected(workspace_id, corpora))
