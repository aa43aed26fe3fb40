"""Answer domain models."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .confidence import ConfidenceLevel, ConfidenceSignals
from .document import Corpus, SearchResponse, SuggestedRoute


class AnswerMode(Enum):
    """How a question should be answered."""
    ANSWER = "answer"
    TICKET_DRAFT = "ticket_draft"


@dataclass(frozen=True)
class AnswerCitation:
    """Numbered source reference in an answer."""
    index: int  # 1-based, matches the source number in the prompt
    corpus: Corpus
    route: Optional[str] = None
    anchor: Optional[str] = None
    url: Optional[str] = None
    source_path: Optional[str] = None


@dataclass
class TicketDraft:
    """Support escalation draft."""
    title: str
    summary: list[str]
    user_question: str
    suggested_next_info: list[str]
    citations: list[AnswerCitation] = field(default_factory=list)
    attempted_answer: Optional[str] = None


@dataclass
class AnswerPlan:
    """Everything the external answer generator needs for one question."""
    question: str
    confidence: ConfidenceLevel
    signals: ConfidenceSignals
    mode: AnswerMode
    sources: str
    citations: list[AnswerCitation]
    fallback_answer: str
    suggested_routes: list[SuggestedRoute]
    search: SearchResponse
    ticket_draft: Optional[TicketDraft] = None
    answer: Optional[str] = None  # generated text, once applied
