"""Canonical identity for both corpora.

Docs are route-first: the canonical id is ``docs:<route>`` where the route is
the folder holding a ``page.mdx``. KB articles are path-first:
``kb:<relative/path.md>`` and never carry a route.
"""

import re
from typing import Any, Optional

from ..exceptions import UnknownCorpusError
from ..models.document import Corpus, DocumentIdentity

PAGE_MARKER = "page.mdx"
KB_EXTENSION = ".md"
ROOT_TITLE = "Home"


def parse_corpus(value: str | Corpus) -> Corpus:
    """Corpus from its tag ("docs" / "kb")."""
    if isinstance(value, Corpus):
        return value
    try:
        return Corpus(value.strip().lower())
    except ValueError:
        raise UnknownCorpusError(value) from None


def normalize_path(relative_path: str) -> str:
    """Forward slashes, no leading ``./``."""
    normalized = relative_path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def is_valid_docs_page(relative_path: str, page_marker: str = PAGE_MARKER) -> bool:
    normalized = normalize_path(relative_path).lower()
    marker = page_marker.lower()
    return normalized == marker or normalized.endswith("/" + marker)


def is_valid_kb_article(relative_path: str, extension: str = KB_EXTENSION) -> bool:
    return normalize_path(relative_path).lower().endswith(extension.lower())


def derive_route(relative_path: str, page_marker: str = PAGE_MARKER) -> str:
    """Route of a docs page.

    Examples:
        page.mdx                  -> /
        certification/page.mdx    -> /certification
        guides/webhooks/page.mdx  -> /guides/webhooks
    """
    marker = re.compile(r"/?" + re.escape(page_marker) + r"$", re.IGNORECASE)
    route = marker.sub("", normalize_path(relative_path))

    if not route.startswith("/"):
        route = "/" + route
    if route == "/":
        return route
    return route.rstrip("/") or "/"


def build_canonical_id(corpus: Corpus, key: str) -> str:
    return f"{corpus.value}:{key}"


def resolve_identity(relative_path: str, corpus: str | Corpus) -> DocumentIdentity:
    """Canonical id and route for a file, or an ineligible identity."""
    corpus = parse_corpus(corpus)

    if corpus is Corpus.DOCS:
        if not is_valid_docs_page(relative_path):
            return DocumentIdentity(canonical_id=None, route=None, eligible=False)
        route = derive_route(relative_path)
        return DocumentIdentity(
            canonical_id=build_canonical_id(corpus, route), route=route, eligible=True
        )

    if not is_valid_kb_article(relative_path):
        return DocumentIdentity(canonical_id=None, route=None, eligible=False)
    return DocumentIdentity(
        canonical_id=build_canonical_id(corpus, normalize_path(relative_path)),
        route=None,
        eligible=True,
    )


def humanize(name: str) -> str:
    """merchant-accounts -> Merchant Accounts, getting_started -> Getting Started."""
    spaced = re.sub(r"[-_]", " ", name)
    return re.sub(r"\b\w", lambda m: m.group().upper(), spaced).strip()


def _route_folder(route: str) -> Optional[str]:
    segments = [s for s in route.split("/") if s]
    return segments[-1] if segments else None


def _file_stem(source_path: str, extension: str = KB_EXTENSION) -> str:
    filename = normalize_path(source_path).rsplit("/", 1)[-1]
    return re.sub(re.escape(extension) + r"$", "", filename, flags=re.IGNORECASE)


def extract_frontmatter_title(frontmatter: dict[str, Any]) -> Optional[str]:
    """Front-matter title when it is a non-empty string."""
    title = frontmatter.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return None


def derive_title(
    frontmatter_title: Optional[str],
    first_heading: Optional[str],
    path_or_route: str,
    corpus: str | Corpus = Corpus.DOCS,
) -> str:
    """Display title; first non-empty of front matter, H1, then the path.

    For docs the fallback is the humanized last route segment ("Home" for
    the root route); for KB it is the humanized file name.
    """
    if frontmatter_title:
        return frontmatter_title
    if first_heading:
        return first_heading

    if parse_corpus(corpus) is Corpus.DOCS:
        folder = _route_folder(path_or_route)
        return humanize(folder) if folder else ROOT_TITLE

    return humanize(_file_stem(path_or_route)) or ROOT_TITLE
