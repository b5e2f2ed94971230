from __future__ import annotations

import os

SQLITE_PATH = os.getenv("SQLITE_PATH", "./documents.db")
BLOB_ROOT = os.getenv("BLOB_ROOT", "./blobs")
METADATA_BACKEND = os.getenv("METADATA_BACKEND", "sqlite").strip().lower()
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local").strip().lower()
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY", "")
DOCUMENTS_BUCKET = os.getenv("DOCUMENTS_BUCKET", "portfolio-documents")
FALLBACK_BUCKET = os.getenv("FALLBACK_BUCKET", "report-files")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "20"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
