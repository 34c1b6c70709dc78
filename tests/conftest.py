from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# 2024-01-02T03:04:05.678901234Z
START_NS = 1_704_164_645_678_901_234


class FakeClock:
    """Deterministic clock; every reading advances by `step_ns`."""

    def __init__(self, start_ns: int = START_NS, step_ns: int = 1_000_000_000) -> None:
        self.now_ns = start_ns
        self.step_ns = step_ns

    def time_ns(self) -> int:
        value = self.now_ns
        self.now_ns += self.step_ns
        return value


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point the data directory at a temp dir so tests never touch real ./data.
    """
    data = tmp_path / "data"
    monkeypatch.setenv("DOCVERIFY_DATA_DIR", str(data))
    monkeypatch.setenv("PERSIST_TO_DISK", "true")
    return tmp_path


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(sandbox_project: Path, fake_clock: FakeClock):
    from persistence.document_state import MapDocumentStateRepository
    from persistence.repositories import AsyncMapDocumentRepository
    from services.document_registry import DocumentRegistry

    return DocumentRegistry(AsyncMapDocumentRepository(MapDocumentStateRepository.on_disk()), clock=fake_clock)


@pytest.fixture
def client(registry):
    from fastapi.testclient import TestClient

    import app as app_module

    return TestClient(app_module.create_app(registry))
