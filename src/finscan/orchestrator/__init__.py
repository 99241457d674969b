"""Upload processing orchestration."""
from .processor import ExtractionService, TransactionStore

__all__ = ["ExtractionService", "TransactionStore"]
