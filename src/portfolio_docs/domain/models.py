from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Union

FOLDER = "folder"
FILE = "file"
DOCUMENT_KINDS = (FOLDER, FILE)


@dataclass
class Folder:
    id: str
    company_id: str
    name: str
    parent_id: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    kind: ClassVar[str] = FOLDER


@dataclass
class File:
    id: str
    company_id: str
    name: str
    storage_path: str
    size_bytes: int
    original_file_name: str
    parent_id: str | None = None
    mime_type: str | None = None
    report_file_id: str | None = None
    source_report_id: str | None = None
    text_content: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    kind: ClassVar[str] = FILE


DocumentNode = Union[Folder, File]


@dataclass
class DocumentTreeNode:
    document: DocumentNode
    children: list[DocumentTreeNode] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.document.id

    @property
    def kind(self) -> str:
        return self.document.kind

    @property
    def name(self) -> str:
        return self.document.name


@dataclass
class BreadcrumbItem:
    folder_id: str | None
    name: str


@dataclass
class BlobDeleteResult:
    path: str
    deleted: bool
    error: str | None = None


@dataclass
class PartialStorageDeleteFailure:
    """Blobs that could not be removed while their metadata rows were deleted."""

    failed_paths: list[str]
    errors: dict[str, str] = field(default_factory=dict)


@dataclass
class DeleteResult:
    deleted_ids: list[str]
    storage_failure: PartialStorageDeleteFailure | None = None
