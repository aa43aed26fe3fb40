"""Block nodes shared by the Markdown and MDX normalizers.

Bodies are parsed with markdown-it-py into a closed set of block kinds, each
with one pure render function. Only the MDX dialect ever produces
ComponentNode, which renders to nothing.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode


class Dialect(Enum):
    """Markup dialect of a source file."""
    MARKDOWN = "markdown"
    MDX = "mdx"


@dataclass(frozen=True)
class HeadingNode:
    level: int
    text: str


@dataclass(frozen=True)
class ParagraphNode:
    text: str


@dataclass(frozen=True)
class BlockQuoteNode:
    text: str


@dataclass(frozen=True)
class ListNode:
    text: str
    ordered: bool = False


@dataclass(frozen=True)
class TableNode:
    text: str


@dataclass(frozen=True)
class CodeNode:
    lang: str
    body: str


@dataclass(frozen=True)
class ThematicBreakNode:
    pass


@dataclass(frozen=True)
class HtmlNode:
    html: str


@dataclass(frozen=True)
class ComponentNode:
    """ESM statement, JSX flow element or expression block (MDX only)."""
    source: str


BlockNode = Union[
    HeadingNode,
    ParagraphNode,
    BlockQuoteNode,
    ListNode,
    TableNode,
    CodeNode,
    ThematicBreakNode,
    HtmlNode,
    ComponentNode,
]


def _render_heading(node: HeadingNode) -> str:
    return f"{'#' * node.level} {node.text}"


def _fence_for(node: CodeNode) -> str:
    """Fence longer than any fence-like run opening a body line."""
    char = "~" if "`" in node.lang else "`"
    runs = re.findall(rf"^[ \t]*({re.escape(char)}+)", node.body, re.M)
    return char * max(3, max((len(run) + 1 for run in runs), default=0))


def _render_code(node: CodeNode) -> str:
    fence = _fence_for(node)
    return f"{fence}{node.lang}\n{node.body}\n{fence}"


def _render_text(node: Union[ParagraphNode, BlockQuoteNode, ListNode, TableNode]) -> str:
    return node.text.strip()


_RENDERERS: dict[type, Callable[..., str]] = {
    HeadingNode: _render_heading,
    ParagraphNode: _render_text,
    BlockQuoteNode: _render_text,
    ListNode: _render_text,
    TableNode: _render_text,
    CodeNode: _render_code,
    ThematicBreakNode: lambda node: "---",
    HtmlNode: lambda node: node.html.strip(),
    ComponentNode: lambda node: "",
}


def render_node(node: BlockNode) -> str:
    return _RENDERERS[type(node)](node)


def render_blocks(nodes: list[BlockNode]) -> str:
    """Render nodes and join non-empty output with blank lines."""
    rendered = (render_node(n) for n in nodes)
    return "\n\n".join(text for text in rendered if text)


def first_heading(nodes: list[BlockNode]) -> Optional[str]:
    """Text of the first top-level H1."""
    for node in nodes:
        if isinstance(node, HeadingNode) and node.level == 1:
            return node.text
    return None


# ---------------------------------------------------------------------------
# markdown-it-py tree -> block nodes
# ---------------------------------------------------------------------------

_parser = MarkdownIt("commonmark").enable("table")

# Line starts that would re-parse as block syntax once escapes are dropped.
_ORDERED_MARKER = re.compile(r"^([ \t]{0,3}\d{1,9})([.)])(?=[ \t]|$)", re.M)
_BLOCK_MARKER = re.compile(
    r"^([ \t]{0,3})(?=[-+*](?:[ \t]|$)|>|#{1,6}(?:[ \t]|$)|`{3}|~{3}|[-*_=][-*_= \t]*$)", re.M
)
_FLOW_MARKER = re.compile(r"^([ \t]{0,3})(?=<[A-Za-z/>]|\{)", re.M)


class InlinePolicy:
    """How inline syntax turns into plain text for a dialect."""

    def __init__(self, strip_text: Optional[Callable[[str], str]] = None, keep_html: bool = True):
        self._strip_text = strip_text
        self._keep_html = keep_html

    def text(self, value: str) -> str:
        return self._strip_text(value) if self._strip_text else value

    def html(self, value: str) -> str:
        return value if self._keep_html else ""

    def escape(self, value: str) -> str:
        """Backslash-escape line starts that read as block markers.

        Without kept HTML, a leading tag or brace is flow syntax too.
        """
        value = _ORDERED_MARKER.sub(r"\1\\\2", value)
        value = _BLOCK_MARKER.sub(r"\1\\", value)
        if not self._keep_html:
            value = _FLOW_MARKER.sub(r"\1\\", value)
        return value


MARKDOWN_INLINE = InlinePolicy()


def _inline_text(node: SyntaxTreeNode, policy: InlinePolicy) -> str:
    kind = node.type
    if kind == "text":
        return policy.text(node.content)
    if kind == "code_inline":
        return node.content
    if kind in ("softbreak", "hardbreak"):
        return "\n"
    if kind == "html_inline":
        return policy.html(node.content)
    return "".join(_inline_text(child, policy) for child in node.children)


def _block_text(node: SyntaxTreeNode, policy: InlinePolicy) -> str:
    kind = node.type
    if kind == "inline":
        return _inline_text(node, policy).strip()
    if kind in ("fence", "code_block"):
        return node.content.rstrip("\n")
    if kind == "html_block":
        return policy.html(node.content).strip()
    if kind == "tr":
        cells = (_block_text(cell, policy) for cell in node.children)
        return " ".join(cell for cell in cells if cell)
    parts = (_block_text(child, policy) for child in node.children)
    return "\n".join(part for part in parts if part)


def _code_body(content: str) -> str:
    return content[:-1] if content.endswith("\n") else content


def to_block(node: SyntaxTreeNode, policy: InlinePolicy = MARKDOWN_INLINE) -> BlockNode:
    """Map one top-level markdown-it node onto a block kind."""
    kind = node.type
    if kind == "heading":
        return HeadingNode(level=int(node.tag[1]), text=_block_text(node, policy))
    if kind == "paragraph":
        return ParagraphNode(text=policy.escape(_block_text(node, policy)))
    if kind == "blockquote":
        return BlockQuoteNode(text=policy.escape(_block_text(node, policy)))
    if kind in ("bullet_list", "ordered_list"):
        return ListNode(
            text=policy.escape(_block_text(node, policy)), ordered=kind == "ordered_list"
        )
    if kind == "table":
        return TableNode(text=policy.escape(_block_text(node, policy)))
    if kind == "fence":
        info = node.info.strip()
        return CodeNode(lang=info.split()[0] if info else "", body=_code_body(node.content))
    if kind == "code_block":
        return CodeNode(lang="", body=_code_body(node.content))
    if kind == "hr":
        return ThematicBreakNode()
    if kind == "html_block":
        return HtmlNode(html=policy.html(node.content))
    return ParagraphNode(text=policy.escape(_block_text(node, policy)))


def parse_blocks(markdown: str, policy: InlinePolicy = MARKDOWN_INLINE) -> list[BlockNode]:
    """Parse markdown into top-level block nodes."""
    tree = SyntaxTreeNode(_parser.parse(markdown))
    return [to_block(child, policy) for child in tree.children]
