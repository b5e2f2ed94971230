from unittest.mock import Mock

import pytest

from portfolio_docs.adapters.fallback_blob_store import FallbackBlobStore
from portfolio_docs.adapters.local_blob_store import LocalBlobStore
from portfolio_docs.domain.errors import BlobNotFoundError, BlobStoreError
from portfolio_docs.domain.models import BlobDeleteResult


def test_local_put_get_and_delete(tmp_path) -> None:
    store = LocalBlobStore(tmp_path / "bucket")

    store.put("c1/1-a_deck.pdf", b"deck")
    assert store.get("c1/1-a_deck.pdf") == b"deck"
    assert (tmp_path / "bucket" / "c1" / "1-a_deck.pdf").read_bytes() == b"deck"

    results = store.delete_many(["c1/1-a_deck.pdf", "c1/never-written.pdf"])
    assert results == [
        BlobDeleteResult(path="c1/1-a_deck.pdf", deleted=True),
        BlobDeleteResult(path="c1/never-written.pdf", deleted=True),
    ]
    with pytest.raises(BlobNotFoundError):
        store.get("c1/1-a_deck.pdf")


def test_local_put_refuses_to_overwrite(tmp_path) -> None:
    store = LocalBlobStore(tmp_path)
    store.put("c1/x.pdf", b"first")

    with pytest.raises(BlobStoreError):
        store.put("c1/x.pdf", b"second")
    assert store.get("c1/x.pdf") == b"first"


def test_local_rejects_paths_outside_root(tmp_path) -> None:
    store = LocalBlobStore(tmp_path / "bucket")

    with pytest.raises(BlobStoreError):
        store.put("../escape.txt", b"x")
    with pytest.raises(BlobStoreError):
        store.get("/etc/passwd")
    results = store.delete_many(["../escape.txt"])
    assert results[0].deleted is False


def test_fallback_reads_secondary_store_when_primary_misses(tmp_path) -> None:
    primary = LocalBlobStore(tmp_path / "portfolio-documents")
    reports = LocalBlobStore(tmp_path / "report-files")
    reports.put("c1/report.pdf", b"report")
    store = FallbackBlobStore(primary, [reports])

    assert store.get("c1/report.pdf") == b"report"
    with pytest.raises(BlobNotFoundError):
        store.get("c1/nowhere.pdf")


def test_fallback_prefers_primary_and_writes_only_there(tmp_path) -> None:
    primary = LocalBlobStore(tmp_path / "primary")
    secondary = Mock()
    store = FallbackBlobStore(primary, [secondary])

    store.put("c1/a.pdf", b"a")
    assert store.get("c1/a.pdf") == b"a"
    assert store.delete_many(["c1/a.pdf"]) == [BlobDeleteResult(path="c1/a.pdf", deleted=True)]

    secondary.get.assert_not_called()
    secondary.put.assert_not_called()
    secondary.delete_many.assert_not_called()


def test_fallback_propagates_other_errors() -> None:
    primary = Mock()
    primary.get.side_effect = BlobStoreError("auth failed")
    store = FallbackBlobStore(primary, [Mock()])

    with pytest.raises(BlobStoreError, match="auth failed"):
        store.get("c1/a.pdf")
