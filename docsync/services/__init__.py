"""Service layer for business logic and validation."""

from docsync.services.document_service import DocumentService
from docsync.services.sync import PeriodicReconciler, SyncEngine, SyncResult

__all__ = ["DocumentService", "SyncEngine", "SyncResult", "PeriodicReconciler"]
