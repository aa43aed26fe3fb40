from pathlib import Path
from typing import Optional

from verbatim.core.models import ParsedDocument
from .normalizer import parse_mdx


class MdxLoader:
    """Docs pages: markdown plus ESM, JSX and expression blocks."""

    EXTENSIONS = {".mdx"}

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONS

    def parse(self, text: str, source_path: Optional[str] = None) -> ParsedDocument:
        return parse_mdx(text, source_path)

    def load(self, file_path: Path) -> ParsedDocument:
        return self.parse(file_path.read_text(encoding="utf-8"), str(file_path))
