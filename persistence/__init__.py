from __future__ import annotations

from .disk_store import DiskJsonOrderedMap, InMemoryOrderedMap
from .document_state import DocumentRecord, DocumentStateRepository, MapDocumentStateRepository
from .interfaces import OrderedKeyValueMap
from .repositories import AsyncDocumentRepository, AsyncMapDocumentRepository

__all__ = [
    "OrderedKeyValueMap",
    "DiskJsonOrderedMap",
    "InMemoryOrderedMap",
    "DocumentRecord",
    "DocumentStateRepository",
    "MapDocumentStateRepository",
    "AsyncDocumentRepository",
    "AsyncMapDocumentRepository",
]
