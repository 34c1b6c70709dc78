from __future__ import annotations

from typing import Literal

Operation = Literal["get", "update", "delete"]

# Lookups answer 404; failed mutations answer 400.
_STATUS_BY_OPERATION: dict[str, int] = {"get": 404, "update": 400, "delete": 400}


class DocumentRegistryError(Exception):
    """Base exception for document registry errors."""


class DocumentNotFoundError(DocumentRegistryError, LookupError):
    """No record is stored under `document_id` for the attempted operation."""

    def __init__(self, document_id: str, operation: Operation):
        self.document_id = document_id
        self.operation = operation
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return _STATUS_BY_OPERATION[self.operation]

    @property
    def message(self) -> str:
        if self.operation == "get":
            return f"Document with id={self.document_id} not found."
        return f"Couldn't {self.operation} document with id={self.document_id}. Not found."
