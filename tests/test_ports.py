from portfolio_docs.adapters.fallback_blob_store import FallbackBlobStore
from portfolio_docs.adapters.local_blob_store import LocalBlobStore
from portfolio_docs.adapters.sqlite_document_repository import SQLiteDocumentRepository
from portfolio_docs.adapters.supabase_blob_store import SupabaseBlobStore
from portfolio_docs.adapters.supabase_document_repository import SupabaseDocumentRepository
from portfolio_docs.ports.blob_store_port import BlobStorePort
from portfolio_docs.ports.document_repository_port import DocumentRepositoryPort


class InMemoryBlobs:
    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}

    def put(self, path: str, data: bytes, content_type: str | None = None) -> None:
        self.blobs[path] = data

    def get(self, path: str) -> bytes:
        return self.blobs[path]

    def delete_many(self, paths: list[str]) -> list:
        return []


def test_blob_store_port_runtime_checkable(tmp_path) -> None:
    local = LocalBlobStore(tmp_path)
    assert isinstance(InMemoryBlobs(), BlobStorePort)
    assert isinstance(local, BlobStorePort)
    assert isinstance(SupabaseBlobStore("https://x", "key", "bucket"), BlobStorePort)
    assert isinstance(FallbackBlobStore(local, []), BlobStorePort)


def test_document_repository_port_runtime_checkable(tmp_path) -> None:
    assert isinstance(SQLiteDocumentRepository(str(tmp_path / "t.db")), DocumentRepositoryPort)
    assert isinstance(SupabaseDocumentRepository("https://x", "key"), DocumentRepositoryPort)
    assert not isinstance(InMemoryBlobs(), DocumentRepositoryPort)
