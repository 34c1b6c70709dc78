from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from services.clock import current_date
from services.document_registry import DocumentRegistry, overlay_fields
from services.errors import DocumentNotFoundError


def test_overlay_fields_caller_wins():
    merged = overlay_fields({"status": "pending", "name": "old"}, {"status": "authenticated"})
    assert merged == {"status": "authenticated", "name": "old"}


def test_current_date_divides_nanoseconds_by_a_million(fake_clock):
    fake_clock.now_ns = 1_500_000_000_999_999_999
    assert current_date(fake_clock) == datetime(2017, 7, 14, 2, 40, 0, 999000, tzinfo=timezone.utc)


def test_create_sets_server_fields(registry):
    async def _run():
        rec = await registry.create({"name": "A", "hash": "h1", "owner": "o1"})
        assert rec.id
        assert rec.status == "pending"
        assert rec.updatedAt is None
        assert rec.createdAt == datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)

    asyncio.run(_run())


def test_create_ignores_client_supplied_server_fields(registry):
    async def _run():
        rec = await registry.create(
            {"id": "chosen", "createdAt": "1999-01-01T00:00:00.000Z", "updatedAt": "1999-01-01T00:00:00.000Z"}
        )
        assert rec.id != "chosen"
        assert rec.createdAt.year == 2024
        assert rec.updatedAt is None

    asyncio.run(_run())


def test_create_regenerates_colliding_id(sandbox_project, fake_clock):
    from persistence.document_state import MapDocumentStateRepository
    from persistence.repositories import AsyncMapDocumentRepository

    ids = iter(["dup", "dup", "fresh"])
    reg = DocumentRegistry(
        AsyncMapDocumentRepository(MapDocumentStateRepository.in_memory()),
        clock=fake_clock,
        id_factory=lambda: next(ids),
    )

    async def _run():
        first = await reg.create({"name": "one"})
        second = await reg.create({"name": "two"})
        assert first.id == "dup"
        assert second.id == "fresh"

    asyncio.run(_run())


def test_update_merges_and_keeps_created_at(registry):
    async def _run():
        rec = await registry.create({"name": "A", "hash": "h1", "owner": "o1"})
        upd = await registry.update(rec.id, {"status": "authenticated", "id": "other", "createdAt": None})
        assert upd.id == rec.id
        assert upd.name == "A"
        assert upd.owner == "o1"
        assert upd.status == "authenticated"
        assert upd.createdAt == rec.createdAt
        assert upd.updatedAt is not None and upd.updatedAt > rec.createdAt

    asyncio.run(_run())


def test_update_twice_only_moves_updated_at(registry):
    async def _run():
        rec = await registry.create({"name": "A", "hash": "h1", "owner": "o1"})
        first = await registry.update(rec.id, {"status": "legalized", "hash": "h2"})
        second = await registry.update(rec.id, {"status": "legalized", "hash": "h2"})
        assert first.model_dump(exclude={"updatedAt"}) == second.model_dump(exclude={"updatedAt"})
        assert second.updatedAt > first.updatedAt

    asyncio.run(_run())


@pytest.mark.parametrize("operation", ["get", "update", "delete"])
def test_unknown_id_raises_not_found(registry, operation):
    async def _run():
        if operation == "update":
            await registry.update("ghost", {"status": "x"})
        else:
            await getattr(registry, operation)("ghost")

    with pytest.raises(DocumentNotFoundError) as excinfo:
        asyncio.run(_run())
    assert excinfo.value.document_id == "ghost"
    assert excinfo.value.operation == operation
    assert excinfo.value.status_code == (404 if operation == "get" else 400)


def test_delete_returns_record_and_removes_it(registry):
    async def _run():
        rec = await registry.create({"name": "A"})
        removed = await registry.delete(rec.id)
        assert removed == rec
        assert await registry.list_all() == []
        with pytest.raises(DocumentNotFoundError):
            await registry.get(rec.id)

    asyncio.run(_run())
