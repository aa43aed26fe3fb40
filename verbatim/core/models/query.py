"""Query domain models."""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TokenizedQuery:
    """Query terms (deduplicated, expanded) and quoted phrases."""
    terms: frozenset[str] = field(default_factory=frozenset)
    phrases: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.terms
