"""Document store protocol for dependency injection."""
from typing import Iterable, Optional, Protocol, runtime_checkable

from ..models.document import Chunk, Corpus, Document, StoredChunk


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """Protocol for document and chunk storage."""

    def get_document(self, workspace_id: str, canonical_id: str) -> Optional[Document]:
        """Get a document by identity.

        Args:
            workspace_id: Owning workspace.
            canonical_id: `<corpus>:<key>` id.

        Returns:
            Stored document, or None.
        """
        ...

    def replace_document(self, document: Document, chunks: list[Chunk]) -> None:
        """Upsert a document and swap its whole chunk set.

        Readers see either the old chunks or the new ones, never a mix.

        Args:
            document: Document to store.
            chunks: Complete chunk set for the document.
        """
        ...

    def delete_document(self, workspace_id: str, canonical_id: str) -> bool:
        """Remove a document and its chunks.

        Returns:
            True if something was removed.
        """
        ...

    def list_candidates(
        self, workspace_id: str, corpora: Optional[Iterable[Corpus]] = None
    ) -> list[StoredChunk]:
        """Get all chunks of a workspace joined with their documents.

        Args:
            workspace_id: Workspace to read.
            corpora: Corpus filter; None means all.

        Returns:
            Candidates in a stable order.
        """
        ...

    def count_chunks(
        self, workspace_id: str, corpora: Optional[Iterable[Corpus]] = None
    ) -> int:
        """Get chunk count."""
        ...
