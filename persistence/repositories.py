from __future__ import annotations

import asyncio
from typing import Protocol

from .document_state import DocumentRecord, DocumentStateRepository, MapDocumentStateRepository


class AsyncDocumentRepository(Protocol):
    """
    Domain-level document persistence interface.
    Kept granular (one call per map operation) so a real DB can slot in later.
    """

    async def get(self, document_id: str) -> DocumentRecord | None: ...
    async def put(self, record: DocumentRecord) -> None: ...
    async def pop(self, document_id: str) -> DocumentRecord | None: ...
    async def list_all(self) -> list[DocumentRecord]: ...


class AsyncMapDocumentRepository(AsyncDocumentRepository):
    """
    Async wrapper around a synchronous document repository.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, repo: DocumentStateRepository | None = None) -> None:
        self._repo = repo if repo is not None else MapDocumentStateRepository.on_disk()

    async def get(self, document_id: str) -> DocumentRecord | None:
        return await asyncio.to_thread(self._repo.get_document, document_id)

    async def put(self, record: DocumentRecord) -> None:
        await asyncio.to_thread(self._repo.put_document, record)

    async def pop(self, document_id: str) -> DocumentRecord | None:
        return await asyncio.to_thread(self._repo.pop_document, document_id)

    async def list_all(self) -> list[DocumentRecord]:
        return await asyncio.to_thread(self._repo.list_documents)
