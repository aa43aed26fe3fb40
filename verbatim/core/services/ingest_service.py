"""Ingest service - document indexing."""

import logging
from pathlib import Path
from typing import Optional

from ..exceptions import InvalidInputError
from ..ingestion import (
    DEFAULT_CHUNKING_CONFIG,
    ChunkingConfig,
    chunk_docs_content,
    chunk_kb_content,
    derive_title,
    extract_frontmatter_title,
    hash_content,
    is_unchanged,
    parse_corpus,
    resolve_identity,
)
from ..ingestion.identity import PAGE_MARKER, KB_EXTENSION, normalize_path
from ..models.document import Corpus, Document
from ..models.ingest import IngestFileResult, IngestReport, IngestStatus
from ..protocols.document_store import DocumentStoreProtocol
from ..protocols.loader import DocumentLoaderProtocol

logger = logging.getLogger(__name__)

_INELIGIBLE_MESSAGES = {
    Corpus.DOCS: f"Not a {PAGE_MARKER} file",
    Corpus.KB: f"Not a {KB_EXTENSION} file",
}


class IngestService:
    """Service for indexing corpus files into a document store."""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        loader: DocumentLoaderProtocol,
        workspace_id: str = "default",
        docs_path: Optional[str] = "./docs",
        kb_path: Optional[str] = "./kb",
        chunking: ChunkingConfig = DEFAULT_CHUNKING_CONFIG,
    ):
        """Initialize ingest service.

        Args:
            store: Document store.
            loader: Structural normalizer for .mdx and .md files.
            workspace_id: Workspace that owns everything ingested.
            docs_path: Root of the routed docs corpus.
            kb_path: Root of the KB corpus.
            chunking: Chunk window sizes.
        """
        self._store = store
        self._loader = loader
        self._workspace_id = workspace_id
        self._docs_path = Path(docs_path) if docs_path else None
        self._kb_path = Path(kb_path) if kb_path else None
        self._chunking = chunking

    def ingest_file(
        self, relative_path: str, raw: bytes | str, corpus: str | Corpus
    ) -> IngestFileResult:
        """Ingest one file.

        Ineligible files and unchanged content are skipped without touching
        the store. Parse failures become an ERROR outcome for this file only.

        Args:
            relative_path: Path relative to the corpus root.
            raw: File contents.
            corpus: Target corpus.

        Returns:
            Per-file outcome.
        """
        corpus = parse_corpus(corpus)
        relative_path = normalize_path(relative_path)
        identity = resolve_identity(relative_path, corpus)

        if not identity.eligible:
            logger.debug(f"Skip ineligible: {relative_path}")
            return IngestFileResult(
                filename=relative_path,
                status=IngestStatus.SKIPPED,
                error=_INELIGIBLE_MESSAGES[corpus],
            )

        raw_bytes = raw.encode("utf-8") if isinstance(raw, str) else raw
        existing = self._store.get_document(self._workspace_id, identity.canonical_id)
        if existing is not None and is_unchanged(existing.content_hash, raw_bytes):
            logger.debug(f"Skip unchanged: {relative_path}")
            return IngestFileResult(
                filename=relative_path,
                status=IngestStatus.SKIPPED,
                canonical_id=identity.canonical_id,
                route=identity.route,
                error="Content unchanged",
            )

        content_hash = hash_content(raw_bytes)

        try:
            text = raw_bytes.decode("utf-8")
            parsed = self._loader.parse(Path(relative_path), text)
        except (InvalidInputError, UnicodeDecodeError) as e:
            logger.error(f"Failed to parse {relative_path}: {e}")
            return IngestFileResult(
                filename=relative_path,
                status=IngestStatus.ERROR,
                canonical_id=identity.canonical_id,
                route=identity.route,
                error=str(e),
            )

        title = derive_title(
            extract_frontmatter_title(parsed.frontmatter),
            parsed.first_heading,
            identity.route if corpus is Corpus.DOCS else relative_path,
            corpus,
        )

        if corpus is Corpus.DOCS:
            chunks = chunk_docs_content(parsed.normalized_content, parsed.first_heading, self._chunking)
        else:
            chunks = chunk_kb_content(parsed.normalized_content, parsed.first_heading, self._chunking)

        document = Document(
            workspace_id=self._workspace_id,
            canonical_id=identity.canonical_id,
            corpus=corpus,
            source_path=relative_path,
            title=title,
            content_hash=content_hash,
            route=identity.route,
        )
        self._store.replace_document(document, chunks)

        action = "Updated" if existing is not None else "Indexed"
        logger.info(f"{action} {identity.canonical_id}: {len(chunks)} chunks")
        return IngestFileResult(
            filename=relative_path,
            status=IngestStatus.OK,
            canonical_id=identity.canonical_id,
            route=identity.route,
            chunk_count=len(chunks),
        )

    def ingest_batch(
        self, files: list[tuple[str, bytes | str]], corpus: str | Corpus
    ) -> IngestReport:
        """Ingest (relative_path, contents) pairs; one failure never stops the batch."""
        report = IngestReport()

        for i, (relative_path, raw) in enumerate(files, 1):
            try:
                result = self.ingest_file(relative_path, raw, corpus)
            except Exception as e:
                logger.exception(f"Error processing {relative_path}")
                result = IngestFileResult(
                    filename=normalize_path(relative_path),
                    status=IngestStatus.ERROR,
                    error=str(e),
                )
            report.add(result)

            if i % 50 == 0:
                logger.info(f"Processed: {i}/{len(files)}")

        return report

    def ingest_directory(self, root: str | Path, corpus: str | Corpus) -> IngestReport:
        """Ingest every loadable file under root.

        Args:
            root: Corpus root directory.
            corpus: Corpus the directory holds.

        Returns:
            Batch report.
        """
        root = Path(root)
        corpus = parse_corpus(corpus)

        if not root.is_dir():
            logger.error(f"{corpus.value} path not found: {root}")
            return IngestReport()

        files = []
        for file_path in sorted(root.rglob("*")):
            if not file_path.is_file() or not self._loader.supports(file_path):
                continue
            files.append((file_path.relative_to(root).as_posix(), file_path.read_bytes()))

        report = self.ingest_batch(files, corpus)
        logger.info(
            f"Ingested {corpus.value}: {report.total_processed} processed, "
            f"{report.total_skipped} skipped, {report.total_errors} errors, "
            f"{report.total_chunks} chunks"
        )
        return report

    def run(self) -> IngestReport:
        """Ingest the configured docs and KB directories.

        Returns:
            Combined report for both corpora.
        """
        report = IngestReport()
        if self._docs_path is not None:
            report.extend(self.ingest_directory(self._docs_path, Corpus.DOCS))
        if self._kb_path is not None:
            report.extend(self.ingest_directory(self._kb_path, Corpus.KB))

        if not report.results:
            logger.info("No documents to index")
        return report
