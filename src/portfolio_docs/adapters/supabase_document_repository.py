from __future__ import annotations

from typing import Any

import requests

from portfolio_docs.adapters.document_rows import (
    TABLE_NAME,
    document_from_row,
    document_to_row,
    patch_to_columns,
)
from portfolio_docs.domain.errors import MetadataStoreError
from portfolio_docs.domain.models import DocumentNode
from portfolio_docs.ports.document_repository_port import DocumentRepositoryPort


class SupabaseDocumentRepository(DocumentRepositoryPort):
    """Document rows through the PostgREST endpoint of a Supabase project."""

    def __init__(self, base_url: str, service_key: str, timeout: float = 20) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._timeout = timeout

    def insert(self, document: DocumentNode) -> DocumentNode:
        rows = self._request(
            "POST",
            context="insert document",
            json=document_to_row(document),
            representation=True,
        )
        if not rows:
            raise MetadataStoreError("Insert returned no row")
        return document_from_row(rows[0])

    def get(self, company_id: str, document_id: str) -> DocumentNode | None:
        rows = self._request(
            "GET",
            context="fetch document",
            params={
                "select": "*",
                "company_id": f"eq.{company_id}",
                "id": f"eq.{document_id}",
            },
        )
        return document_from_row(rows[0]) if rows else None

    def get_all(self, company_id: str) -> list[DocumentNode]:
        rows = self._request(
            "GET",
            context="list documents",
            params={
                "select": "*",
                "company_id": f"eq.{company_id}",
                "order": "type.asc,name.asc",
            },
        )
        return [document_from_row(row) for row in rows]

    def update(
        self, company_id: str, document_id: str, patch: dict[str, Any]
    ) -> DocumentNode | None:
        columns = patch_to_columns(patch)
        if not columns:
            return self.get(company_id, document_id)
        rows = self._request(
            "PATCH",
            context="update document",
            params={"company_id": f"eq.{company_id}", "id": f"eq.{document_id}"},
            json=columns,
            representation=True,
        )
        return document_from_row(rows[0]) if rows else None

    def delete_many(self, company_id: str, document_ids: set[str]) -> int:
        if not document_ids:
            return 0
        id_list = ",".join(f'"{document_id}"' for document_id in sorted(document_ids))
        rows = self._request(
            "DELETE",
            context="delete documents",
            params={"company_id": f"eq.{company_id}", "id": f"in.({id_list})"},
            representation=True,
        )
        return len(rows)

    def _request(
        self,
        method: str,
        context: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        representation: bool = False,
    ) -> list[dict[str, Any]]:
        headers = self._auth_header()
        if json is not None:
            headers["Content-Type"] = "application/json"
        if representation:
            headers["Prefer"] = "return=representation"
        try:
            response = requests.request(
                method,
                f"{self._base_url}/rest/v1/{TABLE_NAME}",
                headers=headers,
                params=params,
                json=json,
                timeout=self._timeout,
            )
            self._raise_for_status(response, context=context)
            payload = response.json() if response.content else []
        except requests.RequestException as exc:
            raise MetadataStoreError(f"Request failed while attempting to {context}.") from exc
        if isinstance(payload, dict):
            return [payload]
        return list(payload)

    def _auth_header(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._service_key}",
            "apikey": self._service_key,
        }

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code in (401, 403):
            raise MetadataStoreError(f"Auth failed while attempting to {context}.")
        if response.status_code >= 400:
            raise MetadataStoreError(
                f"Database API error {response.status_code} while attempting to {context}."
            )
