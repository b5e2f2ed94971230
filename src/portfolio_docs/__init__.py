"""Per-company folder/file store over a metadata table and a blob store."""

__version__ = "0.1.0"
