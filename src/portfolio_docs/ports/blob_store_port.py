from __future__ import annotations

from typing import Protocol, runtime_checkable

from portfolio_docs.domain.models import BlobDeleteResult


@runtime_checkable
class BlobStorePort(Protocol):
    def put(self, path: str, data: bytes, content_type: str | None = None) -> None:
        """Write a blob, failing if the path is already taken."""

    def get(self, path: str) -> bytes:
        """Return blob bytes; raise BlobNotFoundError when absent."""

    def delete_many(self, paths: list[str]) -> list[BlobDeleteResult]:
        """Best-effort delete, one result per requested path."""
