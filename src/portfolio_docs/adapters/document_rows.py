from __future__ import annotations

from typing import Any

from portfolio_docs.domain.errors import MetadataStoreError
from portfolio_docs.domain.models import FILE, FOLDER, DocumentNode, File, Folder
from portfolio_docs.ports.document_repository_port import PATCHABLE_FIELDS
from portfolio_docs.services.time_utils import parse_iso, to_iso

TABLE_NAME = "portfolio_documents"
COLUMNS = (
    "id",
    "company_id",
    "type",
    "name",
    "parent_id",
    "storage_path",
    "mime_type",
    "file_size_bytes",
    "original_file_name",
    "report_file_id",
    "source_report_id",
    "text_content",
    "created_by",
    "created_at",
    "updated_at",
)


def document_to_row(document: DocumentNode) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": document.id,
        "company_id": document.company_id,
        "type": document.kind,
        "name": document.name,
        "parent_id": document.parent_id,
        "storage_path": None,
        "mime_type": None,
        "file_size_bytes": None,
        "original_file_name": None,
        "report_file_id": None,
        "source_report_id": None,
        "text_content": None,
        "created_by": document.created_by,
        "created_at": to_iso(document.created_at),
        "updated_at": to_iso(document.updated_at),
    }
    if isinstance(document, File):
        row.update(
            storage_path=document.storage_path,
            mime_type=document.mime_type,
            file_size_bytes=document.size_bytes,
            original_file_name=document.original_file_name,
            report_file_id=document.report_file_id,
            source_report_id=document.source_report_id,
            text_content=document.text_content,
        )
    return row


def document_from_row(row: dict[str, Any]) -> DocumentNode:
    kind = row.get("type")
    if kind == FOLDER:
        return Folder(
            id=row["id"],
            company_id=row["company_id"],
            name=row.get("name") or "",
            parent_id=row.get("parent_id"),
            created_by=row.get("created_by"),
            created_at=parse_iso(row.get("created_at")),
            updated_at=parse_iso(row.get("updated_at")),
        )
    if kind == FILE:
        storage_path = row.get("storage_path")
        if not storage_path:
            raise MetadataStoreError(f"File row without storage path: {row.get('id')}")
        name = row.get("name") or ""
        return File(
            id=row["id"],
            company_id=row["company_id"],
            name=name,
            storage_path=storage_path,
            size_bytes=int(row.get("file_size_bytes") or 0),
            original_file_name=row.get("original_file_name") or name,
            parent_id=row.get("parent_id"),
            mime_type=row.get("mime_type"),
            report_file_id=row.get("report_file_id"),
            source_report_id=row.get("source_report_id"),
            text_content=row.get("text_content"),
            created_by=row.get("created_by"),
            created_at=parse_iso(row.get("created_at")),
            updated_at=parse_iso(row.get("updated_at")),
        )
    raise MetadataStoreError(f"Unknown document type {kind!r} for row {row.get('id')}")


def patch_to_columns(patch: dict[str, Any]) -> dict[str, Any]:
    unknown = set(patch) - PATCHABLE_FIELDS
    if unknown:
        raise ValueError(f"Unsupported patch fields: {sorted(unknown)}")
    columns: dict[str, Any] = {}
    for field_name, value in patch.items():
        if field_name == "updated_at":
            value = to_iso(value)
        columns[field_name] = value
    return columns
