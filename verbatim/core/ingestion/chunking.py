"""H2-based chunking.

Chunk boundaries are level-2 headings. H1 is page context and H3+ stay inside
their H2 section. Sections larger than ``max_chars`` are split into
overlapping windows that share the section's heading path and anchor.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional

from ..models.document import Chunk
from .anchor import SlugSession

logger = logging.getLogger(__name__)

_H2_LINE = re.compile(r"^##\s+(.+)$")
_FENCE_LINE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
_FENCE_CLOSE = re.compile(r"^\s{0,3}(`{3,}|~{3,})\s*$")


@dataclass(frozen=True)
class ChunkingConfig:
    """Window sizes for size-splitting oversized sections."""
    max_chars: int = 4000
    overlap_chars: int = 400

    def __post_init__(self) -> None:
        if self.max_chars <= 0:
            raise ValueError("max_chars must be positive")
        if self.overlap_chars < 0:
            raise ValueError("overlap_chars must not be negative")


DEFAULT_CHUNKING_CONFIG = ChunkingConfig()


@dataclass
class Section:
    """H2 section (or the headingless preamble)."""
    heading: str
    anchor: str
    content: str


def split_sections(content: str, session: Optional[SlugSession] = None) -> list[Section]:
    """Split normalized content at H2 lines.

    Content before the first H2 becomes a preamble section with an empty
    heading, dropped when blank. Lines inside fenced code are never treated
    as headings.
    """
    session = session or SlugSession()
    sections: list[Section] = []
    preamble: list[str] = []
    current: Optional[Section] = None
    current_lines: list[str] = []
    fence: Optional[str] = None

    def flush() -> None:
        if current is not None:
            current.content = "\n".join(current_lines).strip()
            sections.append(current)

    for line in content.split("\n"):
        opening = _FENCE_LINE.match(line)
        if fence is not None:
            closing = _FENCE_CLOSE.match(line)
            if closing and closing.group(1)[0] == fence[0] and len(closing.group(1)) >= len(fence):
                fence = None
        elif opening:
            fence = opening.group(1)
        else:
            h2 = _H2_LINE.match(line)
            if h2:
                flush()
                heading = h2.group(1).strip()
                current = Section(heading=heading, anchor=session.slug(heading), content="")
                current_lines = [line]
                continue

        if current is None:
            preamble.append(line)
        else:
            current_lines.append(line)

    flush()

    preamble_text = "\n".join(preamble).strip()
    if preamble_text:
        sections.insert(0, Section(heading="", anchor="", content=preamble_text))

    return sections


def find_break_point(content: str, start: int, end: int) -> int:
    """Best window end in ``content[start:end]``.

    Prefers the last paragraph break, then the last sentence break (". " or
    newline), as long as it falls past the window's half-point; otherwise
    the raw edge.
    """
    half = start + (end - start) // 2

    paragraph = content.rfind("\n\n", start, end)
    if paragraph != -1 and paragraph + 2 > half:
        return paragraph + 2

    candidates = []
    sentence = content.rfind(". ", start, end)
    if sentence != -1:
        candidates.append(sentence + 2)
    newline = content.rfind("\n", start, end)
    if newline != -1:
        candidates.append(newline + 1)
    if candidates and max(candidates) > half:
        return max(candidates)

    return end


def iter_window_spans(content: str, config: ChunkingConfig) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` offsets of overlapping windows.

    Each next window starts ``overlap_chars`` before the previous end, unless
    that would not move past the previous start, in which case it starts at
    the previous end.
    """
    length = len(content)
    start = 0
    while start < length:
        end = min(start + config.max_chars, length)
        if end < length:
            end = find_break_point(content, start, end)

        yield start, end

        if end >= length:
            break

        next_start = end - config.overlap_chars
        if next_start <= start:
            next_start = end
        start = next_start


def _split_into_windows(
    content: str,
    heading_path: list[str],
    anchor: Optional[str],
    config: ChunkingConfig,
    start_index: int,
) -> list[Chunk]:
    chunks: list[Chunk] = []
    for start, end in iter_window_spans(content, config):
        window = content[start:end].strip()
        if not window:
            continue
        chunks.append(
            Chunk(
                heading_path=list(heading_path),
                anchor=anchor,
                content=window,
                chunk_index=start_index + len(chunks),
            )
        )
    return chunks


def _chunk_section(
    section: Section,
    first_heading: Optional[str],
    config: ChunkingConfig,
    start_index: int,
    include_anchors: bool,
) -> list[Chunk]:
    heading_path = [h for h in (first_heading, section.heading) if h]
    anchor = (section.anchor or None) if include_anchors else None

    if len(section.content) <= config.max_chars:
        return [
            Chunk(
                heading_path=heading_path,
                anchor=anchor,
                content=section.content,
                chunk_index=start_index,
            )
        ]

    windows = _split_into_windows(section.content, heading_path, anchor, config, start_index)
    logger.debug(
        f"Section '{section.heading or '(preamble)'}' split into {len(windows)} windows "
        f"({len(section.content)} chars)"
    )
    return windows


def chunk(
    normalized_content: str,
    first_heading: Optional[str] = None,
    config: ChunkingConfig = DEFAULT_CHUNKING_CONFIG,
    include_anchors: bool = True,
) -> list[Chunk]:
    """Chunk normalized content at H2 boundaries.

    Args:
        normalized_content: Output of the structural normalizer.
        first_heading: Page-level H1, prepended to every heading path.
        config: Window sizes for oversized sections.
        include_anchors: False for corpora without navigable routes.

    Returns:
        Chunks with contiguous ``chunk_index`` values starting at 0.
    """
    sections = split_sections(normalized_content, SlugSession())
    chunks: list[Chunk] = []

    for section in sections:
        chunks.extend(
            _chunk_section(section, first_heading, config, len(chunks), include_anchors)
        )

    return chunks


def chunk_docs_content(
    normalized_content: str,
    first_heading: Optional[str] = None,
    config: ChunkingConfig = DEFAULT_CHUNKING_CONFIG,
) -> list[Chunk]:
    """Chunk a docs page; chunks under an H2 carry its anchor."""
    return chunk(normalized_content, first_heading, config, include_anchors=True)


def chunk_kb_content(
    normalized_content: str,
    first_heading: Optional[str] = None,
    config: ChunkingConfig = DEFAULT_CHUNKING_CONFIG,
) -> list[Chunk]:
    """Chunk a KB article; anchors are always None."""
    return chunk(normalized_content, first_heading, config, include_anchors=False)


def build_citation_url(route: str, anchor: Optional[str]) -> str:
    """``route#anchor``, or just the route when there is no anchor."""
    if not anchor:
        return route
    return f"{route}#{anchor}"
