"""Document loader protocol for dependency injection."""
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models.document import ParsedDocument


@runtime_checkable
class DocumentLoaderProtocol(Protocol):
    """Protocol for turning corpus files into parsed documents."""

    def supports(self, file_path: Path) -> bool:
        """Check if the file type can be parsed."""
        ...

    def parse(self, file_path: Path, text: str) -> ParsedDocument:
        """Normalize already-read file text.

        Args:
            file_path: Path used to pick the dialect.
            text: Decoded file contents.

        Returns:
            Parsed document.

        Raises:
            InvalidInputError: Malformed front matter or markup.
        """
        ...
