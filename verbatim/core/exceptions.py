"""
Exception hierarchy for the retrieval engine.

Only the structural normalizer raises: malformed front matter or markup
surfaces as InvalidInputError, which ingestion catches per file. Ineligible
files and empty queries are outcomes, not errors.
"""

from typing import Any


class VerbatimError(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(VerbatimError):
    """Raised when front matter or markup cannot be parsed."""

    def __init__(
        self,
        message: str,
        source_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if source_path:
            details["source_path"] = source_path
        super().__init__(message, details)


class UnknownCorpusError(VerbatimError):
    """Raised when a corpus tag does not name a known corpus."""

    def __init__(self, corpus: str) -> None:
        super().__init__(f"Unknown corpus: {corpus}", {"corpus": corpus})
