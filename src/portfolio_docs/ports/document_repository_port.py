from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from portfolio_docs.domain.models import DocumentNode

PATCHABLE_FIELDS = frozenset({"name", "parent_id", "text_content", "updated_at"})


@runtime_checkable
class DocumentRepositoryPort(Protocol):
    def insert(self, document: DocumentNode) -> DocumentNode:
        """Persist a new document row and return it as stored."""

    def get(self, company_id: str, document_id: str) -> DocumentNode | None:
        """Return one document of a company, or None if missing."""

    def get_all(self, company_id: str) -> list[DocumentNode]:
        """Return every document row of a company."""

    def update(
        self, company_id: str, document_id: str, patch: dict[str, Any]
    ) -> DocumentNode | None:
        """Apply a patch of PATCHABLE_FIELDS; return the updated row or None if missing."""

    def delete_many(self, company_id: str, document_ids: set[str]) -> int:
        """Delete rows by id in one operation and return the number removed."""
