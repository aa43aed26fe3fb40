import logging
from pathlib import Path
from typing import Optional

from verbatim.core.exceptions import InvalidInputError
from verbatim.core.models import ParsedDocument
from .markdown_loader import MarkdownLoader
from .mdx_loader import MdxLoader

logger = logging.getLogger(__name__)


class CompositeLoader:

    def __init__(self):
        self._loaders = [
            MdxLoader(),
            MarkdownLoader(),
        ]

    def supports(self, file_path: Path) -> bool:
        return any(loader.supports(file_path) for loader in self._loaders)

    def loader_for(self, file_path: Path):
        for loader in self._loaders:
            if loader.supports(file_path):
                return loader
        return None

    def parse(self, file_path: Path, text: str) -> ParsedDocument:
        loader = self.loader_for(file_path)
        if loader is None:
            raise InvalidInputError(
                f"Unsupported file type: {file_path.suffix or '<none>'}",
                source_path=str(file_path),
            )
        return loader.parse(text, str(file_path))

    def load(self, file_path: Path) -> Optional[ParsedDocument]:
        if not self.supports(file_path):
            logger.debug(f"No loader for {file_path}")
            return None
        return self.parse(file_path, file_path.read_text(encoding="utf-8"))
