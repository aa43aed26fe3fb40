import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


container = Container()


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.ingestion.chunking import ChunkingConfig
    from .core.protocols.document_store import DocumentStoreProtocol
    from .core.protocols.loader import DocumentLoaderProtocol
    from .core.services.answer_service import AnswerService
    from .core.services.ingest_service import IngestService
    from .core.services.search_service import SearchService
    from .core.strategies.confidence import ConfidenceThresholds
    from .infrastructure.document_loaders import CompositeLoader
    from .infrastructure.stores.memory_store import InMemoryDocumentStore

    container.register(DocumentStoreProtocol, InMemoryDocumentStore, singleton=True)

    container.register(DocumentLoaderProtocol, CompositeLoader, singleton=True)

    container.register(
        IngestService,
        lambda: IngestService(
            store=container.resolve(DocumentStoreProtocol),
            loader=container.resolve(DocumentLoaderProtocol),
            workspace_id=settings.workspace_id,
            docs_path=settings.docs_path,
            kb_path=settings.kb_path,
            chunking=ChunkingConfig(
                max_chars=settings.chunk_max_chars,
                overlap_chars=settings.chunk_overlap_chars,
            ),
        ),
        singleton=True,
    )

    container.register(
        SearchService,
        lambda: SearchService(
            store=container.resolve(DocumentStoreProtocol),
            workspace_id=settings.workspace_id,
            top_k=settings.rag_top_k,
            excerpt_max_chars=settings.excerpt_max_chars,
            max_suggested_routes=settings.max_suggested_routes,
        ),
        singleton=True,
    )

    container.register(
        AnswerService,
        lambda: AnswerService(
            search_service=container.resolve(SearchService),
            thresholds=ConfidenceThresholds(
                low_gap=settings.confidence_low_gap,
                low_top_score=settings.confidence_low_top_score,
                high_gap=settings.confidence_high_gap,
                high_top_score=settings.confidence_high_top_score,
            ),
            max_sources=settings.answer_max_sources,
            max_source_chars=settings.answer_max_source_chars,
        ),
        singleton=True,
    )

    logger.info("Container configured")
    return container
