from __future__ import annotations

import logging
import mimetypes
from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from portfolio_docs.domain.errors import (
    BlobNotFoundError,
    CyclicMoveError,
    DocumentNotFoundError,
    InvalidParentError,
    MetadataStoreError,
    MetadataWriteFailedError,
    MissingBlobError,
    StorageWriteFailedError,
)
from portfolio_docs.domain.hierarchy import (
    ancestor_ids,
    children_by_parent,
    collect_subtree_ids,
    index_by_id,
    is_folder_of_company,
    would_create_cycle,
)
from portfolio_docs.domain.models import (
    BlobDeleteResult,
    BreadcrumbItem,
    DeleteResult,
    DocumentNode,
    DocumentTreeNode,
    File,
    Folder,
    PartialStorageDeleteFailure,
)
from portfolio_docs.domain.storage_paths import build_storage_path, new_disambiguator
from portfolio_docs.domain.tree import build_document_tree, document_sort_key
from portfolio_docs.ports.blob_store_port import BlobStorePort
from portfolio_docs.ports.document_repository_port import DocumentRepositoryPort
from portfolio_docs.services.time_utils import now_utc

logger = logging.getLogger(__name__)

ROOT_LABEL = "Files"


class DocumentStoreService:
    """
    Folder/file tree of one company, split over a metadata table and a blob store.

    Uploads write the blob before the row, so a crash in between leaks a blob
    instead of leaving a row that cannot be downloaded. Deletes remove blobs
    first and always go on to remove the rows; blob failures are reported on
    the result, not raised. Nothing is retried here.
    """

    def __init__(
        self,
        repository: DocumentRepositoryPort,
        blobs: BlobStorePort,
        id_factory: Callable[[], str] | None = None,
        disambiguator_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._blobs = blobs
        self._id_factory = id_factory or (lambda: str(uuid4()))
        self._disambiguator_factory = disambiguator_factory or new_disambiguator
        self._clock = clock or now_utc

    # Reads

    def list_documents(self, company_id: str) -> list[DocumentNode]:
        return self._repository.get_all(company_id)

    def get_document(self, company_id: str, document_id: str) -> DocumentNode:
        document = self._repository.get(company_id, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    def get_tree(self, company_id: str) -> list[DocumentTreeNode]:
        return build_document_tree(self._repository.get_all(company_id))

    def list_children(self, company_id: str, parent_id: str | None = None) -> list[DocumentNode]:
        documents = self._repository.get_all(company_id)
        if parent_id is None:
            # Orphans are listed at the root, as in the tree.
            known_ids = {document.id for document in documents}
            children = [
                document
                for document in documents
                if document.parent_id is None or document.parent_id not in known_ids
            ]
        else:
            children = [document for document in documents if document.parent_id == parent_id]
        return sorted(children, key=document_sort_key)

    def count_children(self, company_id: str, folder_id: str) -> int:
        documents = self._repository.get_all(company_id)
        return sum(1 for document in documents if document.parent_id == folder_id)

    def breadcrumb(self, company_id: str, folder_id: str | None = None) -> list[BreadcrumbItem]:
        """Root item first, then each folder down to folder_id."""
        trail = [BreadcrumbItem(folder_id=None, name=ROOT_LABEL)]
        if folder_id is None:
            return trail
        by_id = index_by_id(self._repository.get_all(company_id))
        folder = by_id.get(folder_id)
        if folder is None:
            raise DocumentNotFoundError(folder_id)
        for ancestor_id in reversed(ancestor_ids(folder_id, by_id)):
            trail.append(BreadcrumbItem(folder_id=ancestor_id, name=by_id[ancestor_id].name))
        trail.append(BreadcrumbItem(folder_id=folder.id, name=folder.name))
        return trail

    # Mutations

    def create_folder(
        self,
        company_id: str,
        name: str,
        parent_id: str | None = None,
        created_by: str | None = None,
    ) -> Folder:
        name = _require_name(name)
        self._require_parent_folder(company_id, parent_id)
        now = self._clock()
        folder = Folder(
            id=self._id_factory(),
            company_id=company_id,
            name=name,
            parent_id=parent_id,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        stored = self._repository.insert(folder)
        logger.info(f"Created folder {stored.id} '{name}' for company {company_id}")
        return stored

    def upload_file(
        self,
        company_id: str,
        data: bytes,
        file_name: str,
        parent_id: str | None = None,
        mime_type: str | None = None,
        created_by: str | None = None,
        report_file_id: str | None = None,
        source_report_id: str | None = None,
    ) -> File:
        original_file_name = file_name
        file_name = _require_name(file_name)
        self._require_parent_folder(company_id, parent_id)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(file_name)

        storage_path = build_storage_path(company_id, file_name, self._disambiguator_factory())
        try:
            self._blobs.put(storage_path, data, mime_type)
        except Exception as exc:
            logger.error(f"Blob write failed for {storage_path}: {exc}")
            raise StorageWriteFailedError(storage_path) from exc

        now = self._clock()
        document = File(
            id=self._id_factory(),
            company_id=company_id,
            name=file_name,
            storage_path=storage_path,
            size_bytes=len(data),
            original_file_name=original_file_name,
            parent_id=parent_id,
            mime_type=mime_type,
            report_file_id=report_file_id,
            source_report_id=source_report_id,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        try:
            stored = self._repository.insert(document)
        except MetadataStoreError as exc:
            logger.warning(f"Metadata insert failed; blob left in place at {storage_path}: {exc}")
            raise MetadataWriteFailedError(storage_path) from exc
        logger.info(
            f"Uploaded file {stored.id} '{file_name}' ({len(data)} bytes) to {storage_path}"
        )
        return stored

    def rename(self, company_id: str, document_id: str, new_name: str) -> DocumentNode:
        new_name = _require_name(new_name)
        updated = self._repository.update(
            company_id, document_id, {"name": new_name, "updated_at": self._clock()}
        )
        if updated is None:
            raise DocumentNotFoundError(document_id)
        logger.info(f"Renamed document {document_id} to '{new_name}'")
        return updated

    def update_content(self, company_id: str, document_id: str, content: str) -> File:
        """Replace the inline text of a file; download serves it instead of the blob."""
        document = self._repository.get(company_id, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        if not isinstance(document, File):
            raise DocumentNotFoundError(document_id, detail="Document is not a file")
        updated = self._repository.update(
            company_id, document_id, {"text_content": content, "updated_at": self._clock()}
        )
        if updated is None:
            raise DocumentNotFoundError(document_id)
        logger.info(f"Updated text content of document {document_id} ({len(content)} chars)")
        return updated

    def move(
        self, company_id: str, document_id: str, new_parent_id: str | None = None
    ) -> DocumentNode:
        by_id = index_by_id(self._repository.get_all(company_id))
        if document_id not in by_id:
            raise DocumentNotFoundError(document_id)
        if new_parent_id is not None:
            if would_create_cycle(document_id, new_parent_id, by_id):
                raise CyclicMoveError(document_id, new_parent_id)
            if not is_folder_of_company(by_id.get(new_parent_id), company_id):
                raise InvalidParentError(new_parent_id)

        updated = self._repository.update(
            company_id,
            document_id,
            {"parent_id": new_parent_id, "updated_at": self._clock()},
        )
        if updated is None:
            raise DocumentNotFoundError(document_id)
        logger.info(f"Moved document {document_id} under {new_parent_id or 'root'}")
        return updated

    def delete(self, company_id: str, document_id: str) -> DeleteResult:
        documents = self._repository.get_all(company_id)
        by_id = index_by_id(documents)
        if document_id not in by_id:
            raise DocumentNotFoundError(document_id)

        ids = collect_subtree_ids(document_id, children_by_parent(documents))
        paths = [
            by_id[collected_id].storage_path
            for collected_id in ids
            if isinstance(by_id[collected_id], File)
        ]
        storage_failure = self._delete_blobs(paths)

        removed = self._repository.delete_many(company_id, set(ids))
        logger.info(
            f"Deleted {removed} document(s) under {document_id} for company {company_id} "
            f"({len(paths)} blob(s))"
        )
        return DeleteResult(deleted_ids=ids, storage_failure=storage_failure)

    def download(self, company_id: str, document_id: str) -> bytes:
        document = self._repository.get(company_id, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        if not isinstance(document, File):
            raise DocumentNotFoundError(document_id, detail="Document is not a file")
        if document.text_content:
            return document.text_content.encode("utf-8")
        try:
            return self._blobs.get(document.storage_path)
        except BlobNotFoundError as exc:
            logger.warning(f"Blob missing for document {document_id}: {document.storage_path}")
            raise MissingBlobError(document_id, document.storage_path) from exc

    # Helpers

    def _require_parent_folder(self, company_id: str, parent_id: str | None) -> None:
        if parent_id is None:
            return
        parent = self._repository.get(company_id, parent_id)
        if not is_folder_of_company(parent, company_id):
            raise InvalidParentError(parent_id)

    def _delete_blobs(self, paths: list[str]) -> PartialStorageDeleteFailure | None:
        if not paths:
            return None
        try:
            results = self._blobs.delete_many(paths)
        except Exception as exc:
            logger.warning(f"Bulk blob delete raised; treating every path as failed: {exc}")
            results = [BlobDeleteResult(path=path, deleted=False, error=str(exc)) for path in paths]

        reported = {result.path for result in results}
        errors = {
            result.path: result.error or "delete failed"
            for result in results
            if not result.deleted
        }
        for path in paths:
            if path not in reported:
                errors[path] = "no result reported"
        if not errors:
            return None

        failed_paths = [path for path in paths if path in errors]
        logger.warning(
            f"{len(failed_paths)} of {len(paths)} blob(s) could not be deleted; "
            f"removing metadata anyway: {failed_paths}"
        )
        return PartialStorageDeleteFailure(failed_paths=failed_paths, errors=errors)


def _require_name(name: str) -> str:
    stripped = name.strip()
    if not stripped:
        raise ValueError("Name must not be empty")
    return stripped
