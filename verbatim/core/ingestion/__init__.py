"""Ingestion primitives: anchors, identity, hashing, chunking."""
from .anchor import SlugSession, generate_anchor, generate_anchors, slugify
from .chunking import (
    DEFAULT_CHUNKING_CONFIG,
    ChunkingConfig,
    build_citation_url,
    chunk,
    chunk_docs_content,
    chunk_kb_content,
)
from .hashing import hash_content, is_unchanged
from .identity import (
    derive_route,
    derive_title,
    extract_frontmatter_title,
    is_valid_docs_page,
    is_valid_kb_article,
    parse_corpus,
    resolve_identity,
)

__all__ = [
    "SlugSession",
    "generate_anchor",
    "generate_anchors",
    "slugify",
    "DEFAULT_CHUNKING_CONFIG",
    "ChunkingConfig",
    "build_citation_url",
    "chunk",
    "chunk_docs_content",
    "chunk_kb_content",
    "hash_content",
    "is_unchanged",
    "derive_route",
    "derive_title",
    "extract_frontmatter_title",
    "is_valid_docs_page",
    "is_valid_kb_article",
    "parse_corpus",
    "resolve_identity",
]
