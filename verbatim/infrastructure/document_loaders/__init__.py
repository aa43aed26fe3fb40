"""Document loader implementations."""
from .blocks import Dialect
from .markdown_loader import MarkdownLoader
from .mdx_loader import MdxLoader
from .composite_loader import CompositeLoader
from .normalizer import normalize, parse_markdown, parse_mdx

__all__ = [
    "Dialect",
    "MarkdownLoader",
    "MdxLoader",
    "CompositeLoader",
    "normalize",
    "parse_markdown",
    "parse_mdx",
]
