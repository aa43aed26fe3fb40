"""Protocol interfaces for dependency injection."""
from .document_store import DocumentStoreProtocol
from .loader import DocumentLoaderProtocol

__all__ = [
    "DocumentStoreProtocol",
    "DocumentLoaderProtocol",
]
