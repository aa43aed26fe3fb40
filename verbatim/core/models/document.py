"""Document domain models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Corpus(Enum):
    """Document corpus. The value doubles as the canonical id tag."""
    DOCS = "docs"  # routed: one page.mdx per folder
    KB = "kb"      # path-addressed markdown articles


@dataclass
class ParsedDocument:
    """Output of the structural normalizer."""
    frontmatter: dict[str, Any]
    normalized_content: str
    first_heading: Optional[str] = None


@dataclass(frozen=True)
class DocumentIdentity:
    """Canonical identity of a corpus file."""
    canonical_id: Optional[str]  # None when not eligible
    route: Optional[str]
    eligible: bool


@dataclass
class Document:
    """Ingested document owned by a workspace."""
    workspace_id: str
    canonical_id: str
    corpus: Corpus
    source_path: str
    title: str
    content_hash: str
    route: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.route is not None) != (self.corpus is Corpus.DOCS):
            raise ValueError(
                f"route must be set iff corpus is docs "
                f"(corpus={self.corpus.value}, route={self.route!r})"
            )


@dataclass
class Chunk:
    """Retrievable passage of a document."""
    heading_path: list[str]
    anchor: Optional[str]
    content: str
    chunk_index: int


@dataclass
class StoredChunk:
    """Chunk joined with its document, as handed out by a store."""
    chunk: Chunk
    canonical_id: str
    corpus: Corpus
    source_path: str
    route: Optional[str] = None
    title: Optional[str] = None

    @property
    def content(self) -> str:
        return self.chunk.content

    @property
    def heading_path(self) -> list[str]:
        return self.chunk.heading_path

    @property
    def anchor(self) -> Optional[str]:
        return self.chunk.anchor


@dataclass
class ScoredCandidate:
    """Stored chunk with its relevance score."""
    chunk: StoredChunk
    score: float

    @property
    def corpus(self) -> Corpus:
        return self.chunk.corpus


@dataclass(frozen=True)
class DocsCitation:
    """Linkable citation into a docs page."""
    route: str
    anchor: Optional[str]
    url: str
    corpus: Corpus = field(default=Corpus.DOCS, init=False)


@dataclass(frozen=True)
class KbCitation:
    """Non-linkable citation of a KB article."""
    source_path: str
    corpus: Corpus = field(default=Corpus.KB, init=False)


Citation = DocsCitation | KbCitation


@dataclass
class SearchResult:
    """Search result for presentation layer."""
    corpus: Corpus
    canonical_id: str
    heading_path: list[str]
    score: float
    citation: Citation
    excerpt: str


@dataclass(frozen=True)
class SuggestedRoute:
    """Docs route worth visiting for a query."""
    route: str
    title: Optional[str]


@dataclass
class SearchDebug:
    """Retrieval diagnostics."""
    retrieval_mode: str
    total_chunks_scanned: int
    top_k: int
    corpus_scope: list[str]


@dataclass
class SearchResponse:
    """Search response for answer and presentation layers."""
    chunks: list[ScoredCandidate]
    results: list[SearchResult]
    suggested_routes: list[SuggestedRoute]
    debug: SearchDebug
