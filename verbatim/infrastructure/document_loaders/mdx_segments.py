"""Split an MDX body into markdown runs and component blocks.

MDX adds three flow constructs on top of markdown: ESM statements, JSX
elements and `{expression}` blocks. They are only recognised at the start of
a block and outside fenced code. Everything else is left for markdown-it.
"""

import re
from typing import Optional, Union

from verbatim.core.exceptions import InvalidInputError
from .blocks import ComponentNode

_ESM_START = re.compile(r"^(?:import|export)\b")
_JSX_START = re.compile(r"^<(?:[A-Za-z][\w.-]*(?=[\s/>]|$)|>|/)")
_FENCE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
_FENCE_CLOSE = re.compile(r"^\s{0,3}(`{3,}|~{3,})\s*$")
_ATX_HEADING = re.compile(r"^\s{0,3}#{1,6}(?:\s|$)")
_TAG = re.compile(
    r"<(/?)(?:([A-Za-z][\w.:-]*)((?:\"[^\"]*\"|'[^']*'|\{(?:[^{}]|\{[^{}]*\})*\}|[^<>\"'{}])*))?>"
)
_INLINE_EXPRESSION = re.compile(r"\{[^{}]*\}")

Segment = Union[str, ComponentNode]


def strip_inline_expressions(text: str) -> str:
    return _INLINE_EXPRESSION.sub("", text)


def _consume_esm(lines: list[str], start: int) -> int:
    end = start
    while end < len(lines) and lines[end].strip():
        end += 1
    return end


def _consume_expression(lines: list[str], start: int, source_path: Optional[str]) -> int:
    depth = 0
    quote = None
    for end in range(start, len(lines)):
        for ch in lines[end]:
            if quote:
                if ch == quote:
                    quote = None
            elif ch in "\"'`":
                quote = ch
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
        if depth <= 0:
            return end + 1
    raise InvalidInputError(
        "Unclosed expression block", source_path=source_path, details={"line": start + 1}
    )


def _consume_jsx(lines: list[str], start: int, source_path: Optional[str]) -> Optional[int]:
    """Line index after the element starting at `start`, or None if not JSX."""
    rest = "\n".join(lines[start:])
    offset = len(rest) - len(rest.lstrip())
    depth = 0

    for match in _TAG.finditer(rest, offset):
        if depth == 0 and match.start() != offset:
            return None
        closing, _name, attrs = match.groups()
        if closing:
            depth -= 1
        elif not (attrs or "").rstrip().endswith("/"):
            depth += 1

        if depth < 0:
            raise InvalidInputError(
                "Unexpected closing tag", source_path=source_path, details={"line": start + 1}
            )
        if depth == 0:
            consumed = rest.count("\n", 0, match.end()) + 1
            return start + consumed

    if depth == 0:
        return None
    raise InvalidInputError(
        "Unclosed JSX element", source_path=source_path, details={"line": start + 1}
    )


def split_segments(body: str, source_path: Optional[str] = None) -> list[Segment]:
    """Markdown strings interleaved with ComponentNode blocks, in source order."""
    lines = body.split("\n")
    segments: list[Segment] = []
    buffer: list[str] = []
    fence: Optional[str] = None
    block_start = True
    i = 0

    def flush():
        if buffer:
            segments.append("\n".join(buffer))
            buffer.clear()

    while i < len(lines):
        line = lines[i]
        stripped = line.lstrip()
        fence_match = _FENCE.match(line)

        if fence:
            buffer.append(line)
            closing = _FENCE_CLOSE.match(line)
            if closing and closing.group(1).startswith(fence):
                fence = None
                block_start = True
            i += 1
            continue

        if fence_match:
            fence = fence_match.group(1)
            buffer.append(line)
            i += 1
            continue

        end = None
        if block_start and stripped:
            if _ESM_START.match(stripped):
                end = _consume_esm(lines, i)
            elif stripped.startswith("{"):
                end = _consume_expression(lines, i, source_path)
            elif _JSX_START.match(stripped):
                end = _consume_jsx(lines, i, source_path)

        if end is not None:
            flush()
            segments.append(ComponentNode(source="\n".join(lines[i:end])))
            i = end
            block_start = True
            continue

        buffer.append(line)
        block_start = not stripped or bool(_ATX_HEADING.match(line))
        i += 1

    flush()
    return segments
