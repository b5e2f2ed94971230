from __future__ import annotations

import sqlite3
from typing import Any

from portfolio_docs.adapters.document_rows import (
    COLUMNS,
    TABLE_NAME,
    document_from_row,
    document_to_row,
    patch_to_columns,
)
from portfolio_docs.domain.errors import MetadataStoreError
from portfolio_docs.domain.models import DocumentNode
from portfolio_docs.ports.document_repository_port import DocumentRepositoryPort

_SELECT_COLUMNS = ", ".join(COLUMNS)


class SQLiteDocumentRepository(DocumentRepositoryPort):
    def __init__(self, sqlite_path: str) -> None:
        self._sqlite_path = sqlite_path
        self._ensure_schema()

    def insert(self, document: DocumentNode) -> DocumentNode:
        row = document_to_row(document)
        placeholders = ", ".join("?" for _ in COLUMNS)
        try:
            with self._connect() as conn:
                conn.execute(
                    f"INSERT INTO {TABLE_NAME}({_SELECT_COLUMNS}) VALUES ({placeholders})",
                    tuple(row[column] for column in COLUMNS),
                )
            return document
        except sqlite3.Error as exc:
            raise MetadataStoreError("Failed to insert document") from exc

    def get(self, company_id: str, document_id: str) -> DocumentNode | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"""
                    SELECT {_SELECT_COLUMNS}
                    FROM {TABLE_NAME}
                    WHERE company_id = ? AND id = ?
                    """,
                    (company_id, document_id),
                ).fetchone()
        except sqlite3.Error as exc:
            raise MetadataStoreError("Failed to fetch document") from exc
        if row is None:
            return None
        return document_from_row(dict(row))

    def get_all(self, company_id: str) -> list[DocumentNode]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    f"""
                    SELECT {_SELECT_COLUMNS}
                    FROM {TABLE_NAME}
                    WHERE company_id = ?
                    ORDER BY type ASC, name ASC
                    """,
                    (company_id,),
                ).fetchall()
        except sqlite3.Error as exc:
            raise MetadataStoreError("Failed to list documents") from exc
        return [document_from_row(dict(row)) for row in rows]

    def update(
        self, company_id: str, document_id: str, patch: dict[str, Any]
    ) -> DocumentNode | None:
        columns = patch_to_columns(patch)
        if not columns:
            return self.get(company_id, document_id)
        assignments = ", ".join(f"{column} = ?" for column in columns)
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    f"""
                    UPDATE {TABLE_NAME}
                    SET {assignments}
                    WHERE company_id = ? AND id = ?
                    """,
                    (*columns.values(), company_id, document_id),
                )
                updated = cursor.rowcount
        except sqlite3.Error as exc:
            raise MetadataStoreError("Failed to update document") from exc
        if updated == 0:
            return None
        return self.get(company_id, document_id)

    def delete_many(self, company_id: str, document_ids: set[str]) -> int:
        if not document_ids:
            return 0
        ids = sorted(document_ids)
        placeholders = ", ".join("?" for _ in ids)
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    f"""
                    DELETE FROM {TABLE_NAME}
                    WHERE company_id = ? AND id IN ({placeholders})
                    """,
                    (company_id, *ids),
                )
                return cursor.rowcount
        except sqlite3.Error as exc:
            raise MetadataStoreError("Failed to delete documents") from exc

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {TABLE_NAME}(
                        id TEXT PRIMARY KEY,
                        company_id TEXT NOT NULL,
                        type TEXT NOT NULL CHECK (type IN ('folder', 'file')),
                        name TEXT NOT NULL,
                        parent_id TEXT,
                        storage_path TEXT,
                        mime_type TEXT,
                        file_size_bytes INTEGER,
                        original_file_name TEXT,
                        report_file_id TEXT,
                        source_report_id TEXT,
                        text_content TEXT,
                        created_by TEXT,
                        created_at TEXT,
                        updated_at TEXT,
                        CHECK (type = 'folder' OR storage_path IS NOT NULL)
                    )
                    """
                )
                conn.execute(
                    f"""
                    CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_company_id
                    ON {TABLE_NAME}(company_id)
                    """
                )
                conn.execute(
                    f"""
                    CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_parent_id
                    ON {TABLE_NAME}(parent_id)
                    """
                )
        except sqlite3.Error as exc:
            raise MetadataStoreError("Failed to initialize document schema") from exc

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._sqlite_path)
        conn.row_factory = sqlite3.Row
        return conn
