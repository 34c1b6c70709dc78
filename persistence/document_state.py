from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, field_serializer

from .disk_store import DiskJsonOrderedMap, InMemoryOrderedMap
from .interfaces import OrderedKeyValueMap
from .paths import data_dir, documents_path


def format_js_date(value: datetime) -> str:
    """Render a datetime the way a JavaScript Date serializes to JSON."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class DocumentRecord(BaseModel):
    """
    One registered document. Mirrors the stored JSON shape:
      { "id": ..., "name": ..., "hash": ..., "owner": ..., "status": ...,
        "createdAt": "2024-01-02T03:04:05.678Z", "updatedAt": null, ...extra }

    Unknown fields sent by clients are kept and echoed back.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    hash: str | None = None
    owner: str | None = None
    status: str = "pending"
    createdAt: datetime
    updatedAt: datetime | None = None

    @field_serializer("createdAt")
    def _serialize_created_at(self, value: datetime) -> str:
        return format_js_date(value)

    @field_serializer("updatedAt")
    def _serialize_updated_at(self, value: datetime | None) -> str | None:
        return format_js_date(value) if value is not None else None

    def to_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class DocumentStateRepository(Protocol):
    def get_document(self, document_id: str) -> DocumentRecord | None:
        ...

    def put_document(self, record: DocumentRecord) -> None:
        ...

    def pop_document(self, document_id: str) -> DocumentRecord | None:
        ...

    def list_documents(self) -> list[DocumentRecord]:
        ...


class MapDocumentStateRepository(DocumentStateRepository):
    """
    Stores documents in an OrderedKeyValueMap keyed by document id.

    Records are validated on the way in and on the way out, so the map only ever
    holds JSON-compatible dicts.
    """

    def __init__(self, store: OrderedKeyValueMap):
        self._store = store

    @classmethod
    def on_disk(cls) -> "MapDocumentStateRepository":
        return cls(DiskJsonOrderedMap(documents_path(data_dir())))

    @classmethod
    def in_memory(cls) -> "MapDocumentStateRepository":
        return cls(InMemoryOrderedMap())

    @property
    def store(self) -> OrderedKeyValueMap:
        return self._store

    def get_document(self, document_id: str) -> DocumentRecord | None:
        rec = self._store.get(document_id)
        if rec is None:
            return None
        return DocumentRecord.model_validate(rec)

    def put_document(self, record: DocumentRecord) -> None:
        self._store.insert(record.id, record.to_doc())

    def pop_document(self, document_id: str) -> DocumentRecord | None:
        rec = self._store.remove(document_id)
        if rec is None:
            return None
        return DocumentRecord.model_validate(rec)

    def list_documents(self) -> list[DocumentRecord]:
        return [DocumentRecord.model_validate(rec) for rec in self._store.values()]
