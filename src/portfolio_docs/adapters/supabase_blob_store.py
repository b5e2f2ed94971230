from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from portfolio_docs.domain.errors import BlobNotFoundError, BlobStoreError
from portfolio_docs.domain.models import BlobDeleteResult
from portfolio_docs.ports.blob_store_port import BlobStorePort

logger = logging.getLogger(__name__)


class SupabaseBlobStore(BlobStorePort):
    """Blobs in one bucket of the Supabase Storage REST API."""

    def __init__(
        self, base_url: str, service_key: str, bucket: str, timeout: float = 20
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._bucket = bucket
        self._timeout = timeout

    @property
    def bucket(self) -> str:
        return self._bucket

    def put(self, path: str, data: bytes, content_type: str | None = None) -> None:
        headers = {
            **self._auth_header(),
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "false",
        }
        try:
            response = requests.post(
                self._object_url(path),
                headers=headers,
                data=data,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise BlobStoreError(f"Upload request failed for {path}") from exc
        self._raise_for_status(response, context=f"upload {path}")

    def get(self, path: str) -> bytes:
        try:
            response = requests.get(
                self._object_url(path),
                headers=self._auth_header(),
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise BlobStoreError(f"Download request failed for {path}") from exc
        if self._is_not_found(response):
            raise BlobNotFoundError(path)
        self._raise_for_status(response, context=f"download {path}")
        return response.content

    def delete_many(self, paths: list[str]) -> list[BlobDeleteResult]:
        if not paths:
            return []
        try:
            response = requests.delete(
                f"{self._base_url}/storage/v1/object/{self._bucket}",
                headers={**self._auth_header(), "Content-Type": "application/json"},
                json={"prefixes": list(paths)},
                timeout=self._timeout,
            )
            self._raise_for_status(response, context="delete objects")
            removed = {item.get("name") for item in response.json() or []}
        except (requests.RequestException, BlobStoreError) as exc:
            logger.error(f"Bulk blob delete failed in bucket {self._bucket}: {exc}")
            return [BlobDeleteResult(path=path, deleted=False, error=str(exc)) for path in paths]

        return [
            BlobDeleteResult(path=path, deleted=True)
            if path in removed
            else BlobDeleteResult(path=path, deleted=False, error="not reported as removed")
            for path in paths
        ]

    def _object_url(self, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/{self._bucket}/{quote(path, safe='/')}"

    def _auth_header(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._service_key}",
            "apikey": self._service_key,
        }

    @staticmethod
    def _is_not_found(response: requests.Response) -> bool:
        if response.status_code == 404:
            return True
        # Storage reports missing objects as 400 with a not_found payload.
        if response.status_code == 400:
            return "not_found" in response.text or "not found" in response.text.lower()
        return False

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code in (401, 403):
            raise BlobStoreError(f"Auth failed while attempting to {context}.")
        if response.status_code == 409:
            raise BlobStoreError(f"Object already exists while attempting to {context}.")
        if response.status_code >= 400:
            raise BlobStoreError(
                f"Storage API error {response.status_code} while attempting to {context}."
            )
