from __future__ import annotations


class DocumentStoreError(RuntimeError):
    """Base class for errors raised by the document store service."""


class InvalidParentError(DocumentStoreError):
    def __init__(self, parent_id: str) -> None:
        super().__init__(f"Parent is not a folder of this company: {parent_id}")
        self.parent_id = parent_id


class DocumentNotFoundError(DocumentStoreError):
    def __init__(self, document_id: str, detail: str = "Document not found") -> None:
        super().__init__(f"{detail}: {document_id}")
        self.document_id = document_id


class CyclicMoveError(DocumentStoreError):
    def __init__(self, document_id: str, new_parent_id: str) -> None:
        super().__init__(
            f"Cannot move {document_id} under {new_parent_id}: target is inside its own subtree"
        )
        self.document_id = document_id
        self.new_parent_id = new_parent_id


class StorageWriteFailedError(DocumentStoreError):
    def __init__(self, storage_path: str) -> None:
        super().__init__(f"Failed to write blob: {storage_path}")
        self.storage_path = storage_path


class MetadataWriteFailedError(DocumentStoreError):
    def __init__(self, storage_path: str) -> None:
        super().__init__(f"Blob written but metadata insert failed: {storage_path}")
        self.storage_path = storage_path


class MissingBlobError(DocumentStoreError):
    def __init__(self, document_id: str, storage_path: str) -> None:
        super().__init__(f"Blob missing for document {document_id}: {storage_path}")
        self.document_id = document_id
        self.storage_path = storage_path


class MetadataStoreError(RuntimeError):
    """Raised by metadata repository adapters."""


class BlobStoreError(RuntimeError):
    """Raised by blob store adapters."""


class BlobNotFoundError(BlobStoreError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Blob not found: {path}")
        self.path = path
