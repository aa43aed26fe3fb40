"""Domain models."""
from .document import (
    Chunk,
    Citation,
    Corpus,
    DocsCitation,
    Document,
    DocumentIdentity,
    KbCitation,
    ParsedDocument,
    ScoredCandidate,
    SearchDebug,
    SearchResponse,
    SearchResult,
    StoredChunk,
    SuggestedRoute,
)
from .query import TokenizedQuery
from .confidence import ConfidenceLevel, ConfidenceResult, ConfidenceSignals
from .answer import AnswerCitation, AnswerMode, AnswerPlan, TicketDraft
from .ingest import IngestFileResult, IngestReport, IngestStatus

__all__ = [
    "Chunk",
    "Citation",
    "Corpus",
    "DocsCitation",
    "Document",
    "DocumentIdentity",
    "KbCitation",
    "ParsedDocument",
    "ScoredCandidate",
    "SearchDebug",
    "SearchResponse",
    "SearchResult",
    "StoredChunk",
    "SuggestedRoute",
    "TokenizedQuery",
    "ConfidenceLevel",
    "ConfidenceResult",
    "ConfidenceSignals",
    "AnswerCitation",
    "AnswerMode",
    "AnswerPlan",
    "TicketDraft",
    "IngestFileResult",
    "IngestReport",
    "IngestStatus",
]
