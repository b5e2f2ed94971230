from __future__ import annotations

from pathlib import Path
from typing import Any

from portfolio_docs.adapters.fallback_blob_store import FallbackBlobStore
from portfolio_docs.adapters.local_blob_store import LocalBlobStore
from portfolio_docs.adapters.sqlite_document_repository import SQLiteDocumentRepository
from portfolio_docs.adapters.supabase_blob_store import SupabaseBlobStore
from portfolio_docs.adapters.supabase_document_repository import SupabaseDocumentRepository
from portfolio_docs.ports.blob_store_port import BlobStorePort
from portfolio_docs.ports.document_repository_port import DocumentRepositoryPort
from portfolio_docs.services.document_store_service import DocumentStoreService
from portfolio_docs.settings import (
    BLOB_ROOT,
    DOCUMENTS_BUCKET,
    FALLBACK_BUCKET,
    METADATA_BACKEND,
    REQUEST_TIMEOUT_SECONDS,
    SQLITE_PATH,
    STORAGE_BACKEND,
    SUPABASE_SERVICE_KEY,
    SUPABASE_URL,
)


def build_services(
    metadata_backend: str = METADATA_BACKEND,
    storage_backend: str = STORAGE_BACKEND,
    sqlite_path: str = SQLITE_PATH,
    blob_root: str = BLOB_ROOT,
    supabase_url: str = SUPABASE_URL,
    supabase_service_key: str = SUPABASE_SERVICE_KEY,
    documents_bucket: str = DOCUMENTS_BUCKET,
    fallback_bucket: str = FALLBACK_BUCKET,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    repository: DocumentRepositoryPort
    if metadata_backend == "sqlite":
        repository = SQLiteDocumentRepository(sqlite_path)
    elif metadata_backend == "supabase":
        _require_supabase(supabase_url, supabase_service_key)
        repository = SupabaseDocumentRepository(supabase_url, supabase_service_key, timeout=timeout)
    else:
        raise RuntimeError(f"Unknown metadata backend: {metadata_backend}")

    buckets = [documents_bucket] + ([fallback_bucket] if fallback_bucket else [])
    stores: list[BlobStorePort]
    if storage_backend == "local":
        stores = [LocalBlobStore(Path(blob_root) / bucket) for bucket in buckets]
    elif storage_backend == "supabase":
        _require_supabase(supabase_url, supabase_service_key)
        stores = [
            SupabaseBlobStore(supabase_url, supabase_service_key, bucket, timeout=timeout)
            for bucket in buckets
        ]
    else:
        raise RuntimeError(f"Unknown storage backend: {storage_backend}")

    blobs: BlobStorePort = stores[0]
    if len(stores) > 1:
        blobs = FallbackBlobStore(stores[0], stores[1:])

    return {
        "document_store_service": DocumentStoreService(repository, blobs),
        "repository": repository,
        "blobs": blobs,
    }


def _require_supabase(url: str, service_key: str) -> None:
    if not url or not service_key:
        raise RuntimeError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY are required for Supabase backends."
        )
