from __future__ import annotations

import logging

from portfolio_docs.domain.errors import BlobNotFoundError
from portfolio_docs.domain.models import BlobDeleteResult
from portfolio_docs.ports.blob_store_port import BlobStorePort

logger = logging.getLogger(__name__)


class FallbackBlobStore(BlobStorePort):
    """
    Read from the primary store, then from each fallback when a blob is missing.

    Writes and deletes only touch the primary. Files imported from company
    reports keep their blobs in the reports bucket while their rows live in the
    document table, so reads have to look in both places.
    """

    def __init__(self, primary: BlobStorePort, fallbacks: list[BlobStorePort]) -> None:
        self._primary = primary
        self._fallbacks = list(fallbacks)

    def put(self, path: str, data: bytes, content_type: str | None = None) -> None:
        self._primary.put(path, data, content_type)

    def get(self, path: str) -> bytes:
        try:
            return self._primary.get(path)
        except BlobNotFoundError:
            pass
        for fallback in self._fallbacks:
            try:
                data = fallback.get(path)
            except BlobNotFoundError:
                continue
            logger.info(f"Blob {path} served from fallback store")
            return data
        raise BlobNotFoundError(path)

    def delete_many(self, paths: list[str]) -> list[BlobDeleteResult]:
        return self._primary.delete_many(paths)
