from __future__ import annotations

from .clock import Clock, SystemClock, current_date, new_document_id
from .document_registry import DocumentRegistry, overlay_fields
from .errors import DocumentNotFoundError, DocumentRegistryError

__all__ = [
    "Clock",
    "SystemClock",
    "current_date",
    "new_document_id",
    "DocumentRegistry",
    "overlay_fields",
    "DocumentNotFoundError",
    "DocumentRegistryError",
]
