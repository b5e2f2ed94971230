from .fallback_blob_store import FallbackBlobStore
from .local_blob_store import LocalBlobStore
from .sqlite_document_repository import SQLiteDocumentRepository
from .supabase_blob_store import SupabaseBlobStore
from .supabase_document_repository import SupabaseDocumentRepository

__all__ = [
    "FallbackBlobStore",
    "LocalBlobStore",
    "SQLiteDocumentRepository",
    "SupabaseBlobStore",
    "SupabaseDocumentRepository",
]
