from .document_store_service import DocumentStoreService

__all__ = ["DocumentStoreService"]
