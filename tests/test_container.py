"""Tests for settings-driven wiring."""

import pytest

from verbatim.config.settings import Settings
from verbatim.container import configure_container, container
from verbatim.core.models import AnswerMode
from verbatim.core.protocols import DocumentStoreProtocol
from verbatim.core.services.answer_service import AnswerService
from verbatim.core.services.ingest_service import IngestService
from verbatim.core.services.search_service import SearchService


@pytest.fixture
def configured(corpus_root):
    settings = Settings(
        workspace_id="wired",
        docs_path=str(corpus_root / "docs"),
        kb_path=str(corpus_root / "kb"),
        rag_top_k=3,
    )
    container.reset()
    yield configure_container(settings)
    container.reset()


def test_services_share_one_store(configured):
    """Test ingested documents are visible to search through the container."""
    report = configured.resolve(IngestService).run()
    assert report.total_processed == 3

    store = configured.resolve(DocumentStoreProtocol)
    assert store.count_chunks("wired") > 0

    response = configured.resolve(SearchService).search("webhook retries")
    assert response.debug.top_k == 3
    assert response.results[0].canonical_id == "docs:/guides/webhooks"


def test_singletons(configured):
    assert configured.resolve(AnswerService) is configured.resolve(AnswerService)


def test_answer_plan_through_container(configured):
    configured.resolve(IngestService).run()
    plan = configured.resolve(AnswerService).plan("webhook signature verification")
    assert plan.mode is AnswerMode.ANSWER


def test_unregistered_interface(configured):
    with pytest.raises(KeyError):
        configured.resolve(dict)
