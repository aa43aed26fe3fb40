"""GitHub-style heading anchors."""

import re

_DISALLOWED = re.compile(r"[^a-z0-9 -]")


def slugify(heading: str) -> str:
    """Slug a heading without duplicate tracking.

    Characters outside ``[a-z0-9 -]`` are dropped (not replaced) and every
    space becomes a hyphen, so "Limits & Retries" gives "limits--retries".
    """
    return _DISALLOWED.sub("", heading.lower()).replace(" ", "-")


class SlugSession:
    """Duplicate-aware slugger scoped to one document.

    Create one per chunking pass and discard it afterwards; sharing a session
    across documents would leak suffixes between them.
    """

    def __init__(self):
        self._occurrences: dict[str, int] = {}

    def slug(self, heading: str) -> str:
        """Slug a heading, suffixing -1, -2, ... on repeats."""
        slug = slugify(heading)
        original = slug
        while slug in self._occurrences:
            self._occurrences[original] += 1
            slug = f"{original}-{self._occurrences[original]}"
        self._occurrences[slug] = 0
        return slug

    def reset(self) -> None:
        self._occurrences.clear()


def generate_anchor(heading: str) -> str:
    """Anchor for a single heading."""
    return SlugSession().slug(heading)


def generate_anchors(headings: list[str]) -> list[str]:
    """Anchors for a document's headings, in order."""
    session = SlugSession()
    return [session.slug(h) for h in headings]
