from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def build_registry():
    from persistence.document_state import MapDocumentStateRepository
    from persistence.repositories import AsyncMapDocumentRepository
    from services.document_registry import DocumentRegistry
    from settings import get_settings

    if get_settings().persist_to_disk:
        state_repo = MapDocumentStateRepository.on_disk()
    else:
        logger.warning("PERSIST_TO_DISK is off: documents will be lost on restart")
        state_repo = MapDocumentStateRepository.in_memory()
    return DocumentRegistry(AsyncMapDocumentRepository(state_repo))


def create_app(registry=None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.document_endpoints import router as documents_router
    from services.errors import DocumentNotFoundError
    from settings import get_settings

    settings = get_settings()

    app = FastAPI(title="DocVerify")
    app.state.registry = registry if registry is not None else build_registry()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DocumentNotFoundError)
    async def document_not_found(request: Request, exc: DocumentNotFoundError):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    app.include_router(documents_router)

    return app


app = create_app()
