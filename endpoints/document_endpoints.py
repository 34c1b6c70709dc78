from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from services.document_registry import DocumentRegistry
from settings import get_settings

router = APIRouter(tags=["documents"])
logger = logging.getLogger(__name__)


def get_registry(request: Request) -> DocumentRegistry:
    """The registry owned by the running app (set up in create_app)."""
    return request.app.state.registry


def _log_request(action: str, document_id: str | None = None, body: dict[str, Any] | None = None) -> None:
    if not get_settings().debug_log_requests:
        return
    # Field names only; values may be large or sensitive.
    logger.info(
        "DOCUMENTS %s: id=%s keys=%s",
        action,
        document_id,
        sorted(body.keys()) if body is not None else None,
    )


# -------------------------------------------------------------------
# POST /documents: register a document hash with its metadata
# -------------------------------------------------------------------
@router.post("/documents")
async def create_document(body: dict[str, Any], registry: DocumentRegistry = Depends(get_registry)):
    _log_request("CREATE", body=body)
    record = await registry.create(body)
    return JSONResponse(record.to_doc())


@router.get("/documents")
async def list_documents(registry: DocumentRegistry = Depends(get_registry)):
    _log_request("LIST")
    records = await registry.list_all()
    return JSONResponse([r.to_doc() for r in records])


@router.get("/documents/{document_id}")
async def get_document(document_id: str, registry: DocumentRegistry = Depends(get_registry)):
    _log_request("GET", document_id)
    record = await registry.get(document_id)
    return JSONResponse(record.to_doc())


# -------------------------------------------------------------------
# PUT /documents/{id}: change status ("authenticated", "legalized", ...) or metadata
# -------------------------------------------------------------------
@router.put("/documents/{document_id}")
async def update_document(
    document_id: str,
    body: dict[str, Any],
    registry: DocumentRegistry = Depends(get_registry),
):
    _log_request("UPDATE", document_id, body)
    record = await registry.update(document_id, body)
    return JSONResponse(record.to_doc())


@router.delete("/documents/{document_id}")
async def delete_document(document_id: str, registry: DocumentRegistry = Depends(get_registry)):
    _log_request("DELETE", document_id)
    record = await registry.delete(document_id)
    return JSONResponse(record.to_doc())
