from .blob_store_port import BlobStorePort
from .document_repository_port import DocumentRepositoryPort

__all__ = ["BlobStorePort", "DocumentRepositoryPort"]
