from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from persistence.document_state import DocumentRecord
from persistence.repositories import AsyncDocumentRepository

from .clock import Clock, SystemClock, current_date, new_document_id
from .errors import DocumentNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "pending"

# Assigned by the registry; values for these in a request body are ignored.
SERVER_OWNED_FIELDS = ("id", "createdAt", "updatedAt")


def overlay_fields(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """
    Defaults first, then every caller-supplied field on top (caller wins per field).
    Fields the caller leaves out keep their default value.
    """
    merged = dict(defaults)
    merged.update(overrides)
    return merged


def _client_fields(body: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in body.items() if k not in SERVER_OWNED_FIELDS}


class DocumentRegistry:
    """
    CRUD over document records.

    The repository, clock and id factory are injected so each app (and each test)
    owns its own store.
    """

    def __init__(
        self,
        repository: AsyncDocumentRepository,
        *,
        clock: Clock | None = None,
        id_factory: Callable[[], str] = new_document_id,
    ) -> None:
        self._repo = repository
        self._clock = clock if clock is not None else SystemClock()
        self._id_factory = id_factory

    async def _fresh_id(self) -> str:
        document_id = self._id_factory()
        while await self._repo.get(document_id) is not None:
            logger.warning("ID COLLISION: regenerating id for new document (id=%s taken)", document_id)
            document_id = self._id_factory()
        return document_id

    async def create(self, body: Mapping[str, Any]) -> DocumentRecord:
        document_id = await self._fresh_id()
        defaults = {
            "id": document_id,
            "createdAt": current_date(self._clock),
            "updatedAt": None,
            "status": DEFAULT_STATUS,
        }
        merged = overlay_fields(defaults, _client_fields(body))
        record = DocumentRecord.model_validate(merged)
        await self._repo.put(record)
        logger.info("Created document id=%s status=%s", record.id, record.status)
        return record

    async def list_all(self) -> list[DocumentRecord]:
        return await self._repo.list_all()

    async def get(self, document_id: str) -> DocumentRecord:
        record = await self._repo.get(document_id)
        if record is None:
            raise DocumentNotFoundError(document_id, "get")
        return record

    async def update(self, document_id: str, body: Mapping[str, Any]) -> DocumentRecord:
        existing = await self._repo.get(document_id)
        if existing is None:
            raise DocumentNotFoundError(document_id, "update")

        merged = overlay_fields(existing.model_dump(), _client_fields(body))
        merged["updatedAt"] = current_date(self._clock)
        record = DocumentRecord.model_validate(merged)
        await self._repo.put(record)
        logger.info("Updated document id=%s status=%s", record.id, record.status)
        return record

    async def delete(self, document_id: str) -> DocumentRecord:
        record = await self._repo.pop(document_id)
        if record is None:
            raise DocumentNotFoundError(document_id, "delete")
        logger.info("Deleted document id=%s", record.id)
        return record
