from __future__ import annotations

from typing import Any, Protocol


class OrderedKeyValueMap(Protocol):
    """
    Durable ordered map from string keys to JSON-like values.

    Iteration order is whatever the backing store keeps; callers must not rely on it
    being insertion order once keys are rewritten.
    """

    def insert(self, key: str, value: dict[str, Any]) -> None:
        """Store `value` under `key`, replacing any previous value."""
        ...

    def get(self, key: str) -> dict[str, Any] | None:
        ...

    def remove(self, key: str) -> dict[str, Any] | None:
        """Remove `key` and return the value it held, or None if absent."""
        ...

    def values(self) -> list[dict[str, Any]]:
        ...
