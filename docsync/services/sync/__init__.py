"""Index reconciliation against the documents directory."""

from docsync.services.sync.engine import SyncEngine, SyncResult
from docsync.services.sync.inference import (
    DEFAULT_CATEGORY_RULES,
    CategoryRule,
    infer_category,
    keyword_rule,
)
from docsync.services.sync.scheduler import PeriodicReconciler

__all__ = [
    "SyncEngine",
    "SyncResult",
    "PeriodicReconciler",
    "CategoryRule",
    "DEFAULT_CATEGORY_RULES",
    "infer_category",
    "keyword_rule",
]
