from .models import (
    FILE,
    FOLDER,
    BlobDeleteResult,
    BreadcrumbItem,
    DeleteResult,
    DocumentNode,
    DocumentTreeNode,
    File,
    Folder,
    PartialStorageDeleteFailure,
)
from .storage_paths import build_storage_path, sanitize_file_name
from .tree import build_document_tree

__all__ = [
    "FILE",
    "FOLDER",
    "BlobDeleteResult",
    "BreadcrumbItem",
    "DeleteResult",
    "DocumentNode",
    "DocumentTreeNode",
    "File",
    "Folder",
    "PartialStorageDeleteFailure",
    "build_document_tree",
    "build_storage_path",
    "sanitize_file_name",
]
