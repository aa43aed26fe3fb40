import re
from typing import Any, Optional

import yaml

from verbatim.core.exceptions import InvalidInputError

_FRONTMATTER = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def split_frontmatter(
    text: str, source_path: Optional[str] = None
) -> tuple[dict[str, Any], str]:
    """Split a leading YAML block from the body.

    Returns an empty mapping when there is no front matter. A block that is
    not valid YAML, or not a mapping, raises InvalidInputError.
    """
    text = text.lstrip("﻿")
    match = _FRONTMATTER.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group("yaml"))
    except yaml.YAMLError as e:
        raise InvalidInputError(f"Invalid front matter: {e}", source_path=source_path) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidInputError(
            "Front matter must be a mapping",
            source_path=source_path,
            details={"type": type(data).__name__},
        )

    return data, text[match.end():]
