from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from portfolio_docs.domain.errors import BlobNotFoundError, BlobStoreError
from portfolio_docs.domain.models import BlobDeleteResult
from portfolio_docs.ports.blob_store_port import BlobStorePort

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStorePort):
    """Blob store backed by a directory; blob paths map to files below the root."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    def put(self, path: str, data: bytes, content_type: str | None = None) -> None:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "xb") as handle:
                handle.write(data)
        except FileExistsError as exc:
            raise BlobStoreError(f"Blob already exists: {path}") from exc
        except OSError as exc:
            raise BlobStoreError(f"Failed to write blob: {path}") from exc

    def get(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except FileNotFoundError as exc:
            raise BlobNotFoundError(path) from exc
        except OSError as exc:
            raise BlobStoreError(f"Failed to read blob: {path}") from exc

    def delete_many(self, paths: list[str]) -> list[BlobDeleteResult]:
        results: list[BlobDeleteResult] = []
        for path in paths:
            try:
                # Already gone counts as deleted.
                self._resolve(path).unlink(missing_ok=True)
                results.append(BlobDeleteResult(path=path, deleted=True))
            except (OSError, BlobStoreError) as exc:
                logger.error(f"Failed to delete blob {path}: {exc}")
                results.append(BlobDeleteResult(path=path, deleted=False, error=str(exc)))
        return results

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise BlobStoreError(f"Invalid blob path: {path!r}")
        return self._root.joinpath(*relative.parts)
