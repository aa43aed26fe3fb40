"""Ingestion domain models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class IngestStatus(Enum):
    """Per-file ingestion outcome."""
    OK = "ok"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class IngestFileResult:
    """Outcome of ingesting one file."""
    filename: str
    status: IngestStatus
    canonical_id: Optional[str] = None
    route: Optional[str] = None
    chunk_count: int = 0
    error: Optional[str] = None


@dataclass
class IngestReport:
    """Outcome of a batch ingestion run."""
    results: list[IngestFileResult] = field(default_factory=list)

    def add(self, result: IngestFileResult) -> None:
        self.results.append(result)

    def extend(self, other: "IngestReport") -> None:
        self.results.extend(other.results)

    def _count(self, status: IngestStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def total_processed(self) -> int:
        return self._count(IngestStatus.OK)

    @property
    def total_skipped(self) -> int:
        return self._count(IngestStatus.SKIPPED)

    @property
    def total_errors(self) -> int:
        return self._count(IngestStatus.ERROR)

    @property
    def total_chunks(self) -> int:
        return sum(r.chunk_count for r in self.results)
