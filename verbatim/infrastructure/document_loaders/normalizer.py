"""Structural normalizer: raw Markdown/MDX -> ParsedDocument."""

import logging
from typing import Optional

from verbatim.core.models import ParsedDocument
from .blocks import (
    MARKDOWN_INLINE,
    BlockNode,
    Dialect,
    InlinePolicy,
    first_heading,
    parse_blocks,
    render_blocks,
)
from .frontmatter import split_frontmatter
from .mdx_segments import split_segments, strip_inline_expressions

logger = logging.getLogger(__name__)

MDX_INLINE = InlinePolicy(strip_text=strip_inline_expressions, keep_html=False)


def _markdown_blocks(body: str, source_path: Optional[str]) -> list[BlockNode]:
    return parse_blocks(body, MARKDOWN_INLINE)


def _mdx_blocks(body: str, source_path: Optional[str]) -> list[BlockNode]:
    nodes: list[BlockNode] = []
    for segment in split_segments(body, source_path):
        if isinstance(segment, str):
            nodes.extend(parse_blocks(segment, MDX_INLINE))
        else:
            nodes.append(segment)
    return nodes


_BLOCK_PARSERS = {
    Dialect.MARKDOWN: _markdown_blocks,
    Dialect.MDX: _mdx_blocks,
}


def normalize(
    raw_text: str, dialect: Dialect, source_path: Optional[str] = None
) -> ParsedDocument:
    """Parse front matter and body, and re-render the body canonically.

    Raises:
        InvalidInputError: malformed front matter or MDX flow syntax.
    """
    frontmatter, body = split_frontmatter(raw_text, source_path)
    nodes = _BLOCK_PARSERS[dialect](body, source_path)

    logger.debug(f"Normalized {source_path or '<text>'}: {len(nodes)} blocks ({dialect.value})")
    return ParsedDocument(
        frontmatter=frontmatter,
        normalized_content=render_blocks(nodes),
        first_heading=first_heading(nodes),
    )


def parse_markdown(raw_text: str, source_path: Optional[str] = None) -> ParsedDocument:
    return normalize(raw_text, Dialect.MARKDOWN, source_path)


def parse_mdx(raw_text: str, source_path: Optional[str] = None) -> ParsedDocument:
    return normalize(raw_text, Dialect.MDX, source_path)
