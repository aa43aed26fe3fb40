"""Query tokenization with phrases, plural folding and synonyms."""

import re
from types import MappingProxyType
from typing import Mapping

from ..models.query import TokenizedQuery

_QUOTED = re.compile(r'"([^"]+)"')
_NON_WORD = re.compile(r"\W+")

STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "or", "that",
    "the", "to", "was", "were", "will", "with", "i", "me", "my",
    "we", "our", "you", "your", "do", "does", "how", "what", "when",
    "where", "which", "who", "why", "can", "could", "would", "should",
})

# Pairs are bidirectional.
SYNONYM_PAIRS: tuple[tuple[str, str], ...] = (
    # Accounts & onboarding
    ("merchant", "account"),
    ("merchant", "mid"),
    ("onboarding", "setup"),
    ("setup", "configure"),
    ("configuration", "setup"),
    ("config", "setup"),
    ("install", "setup"),
    ("activation", "enable"),
    ("enable", "activate"),
    ("verification", "verify"),
    ("kyc", "verification"),
    ("compliance", "regulatory"),
    # Authentication
    ("authenticate", "auth"),
    ("authentication", "auth"),
    ("authorize", "auth"),
    ("authorization", "auth"),
    ("token", "credential"),
    ("key", "credential"),
    ("secret", "credential"),
    # APIs & SDKs
    ("api", "endpoint"),
    ("sdk", "library"),
    ("client", "sdk"),
    ("request", "call"),
    ("response", "reply"),
    ("schema", "model"),
    ("object", "resource"),
    # Payments
    ("payment", "transaction"),
    ("chargeback", "dispute"),
    ("refund", "reversal"),
    ("void", "cancel"),
    ("settlement", "payout"),
    ("capture", "settlement"),
    ("decline", "failure"),
    ("failed", "failure"),
    ("success", "approved"),
    ("payout", "disbursement"),
    # Webhooks & events
    ("webhook", "callback"),
    ("event", "notification"),
    ("retry", "replay"),
    ("delivery", "dispatch"),
    ("signature", "hmac"),
    ("payload", "body"),
    # Errors
    ("error", "exception"),
    ("timeout", "latency"),
    ("limit", "quota"),
)


def _build_synonym_map(pairs: tuple[tuple[str, str], ...]) -> Mapping[str, frozenset[str]]:
    lookup: dict[str, set[str]] = {}
    for a, b in pairs:
        lookup.setdefault(a, set()).add(b)
        lookup.setdefault(b, set()).add(a)
    return MappingProxyType({k: frozenset(v) for k, v in lookup.items()})


SYNONYMS = _build_synonym_map(SYNONYM_PAIRS)


def get_synonyms(term: str) -> frozenset[str]:
    """One-hop synonyms of a term (empty if none)."""
    return SYNONYMS.get(term, frozenset())


def normalize_plural(word: str) -> str:
    """Fold common English plurals: queries -> query, boxes -> box, hooks -> hook."""
    if len(word) < 3:
        return word

    if word.endswith("ies") and len(word) > 4:
        return word[:-3] + "y"

    if word.endswith("es") and len(word) > 3:
        base = word[:-2]
        if base.endswith(("s", "x", "z", "ch", "sh")):
            return base

    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]

    return word


def extract_phrases(text: str) -> list[str]:
    """Lowercased contents of double-quoted spans, empties dropped."""
    phrases = []
    for match in _QUOTED.finditer(text):
        phrase = match.group(1).strip().lower()
        if phrase:
            phrases.append(phrase)
    return phrases


def tokenize(text: str) -> TokenizedQuery:
    """Tokenize a free-text query.

    Quoted spans become phrases and are removed before term extraction.
    Remaining words are lowercased, stop words and single characters dropped,
    plurals folded (keeping the original too) and synonyms of the folded
    form added.
    """
    phrases = extract_phrases(text)
    remaining = _QUOTED.sub(" ", text)

    terms: set[str] = set()
    for word in _NON_WORD.split(remaining.lower()):
        if len(word) <= 1 or word in STOP_WORDS:
            continue

        normalized = normalize_plural(word)
        terms.add(normalized)
        if normalized != word:
            terms.add(word)

        terms.update(get_synonyms(normalized))

    return TokenizedQuery(terms=frozenset(terms), phrases=tuple(phrases))
