"""LLM extraction, validation and fallback module."""
from .models import (
    CATEGORIES,
    TaskKind,
    TransactionCandidate,
    ReceiptExtraction,
    FinancialSummary,
    Rejection,
    StatementResult,
    BulkCreateResult,
    provenance_key,
)
from .gateway import ModelGateway, GeminiGateway
from .normalizer import normalize_transaction, normalize_receipt, normalize_batch, try_normalize
from .dedup import deduplicate
from .fallback import scan_statement, scan_receipt

__all__ = [
    "CATEGORIES",
    "TaskKind",
    "TransactionCandidate",
    "ReceiptExtraction",
    "FinancialSummary",
    "Rejection",
    "StatementResult",
    "BulkCreateResult",
    "provenance_key",
    "ModelGateway",
    "GeminiGateway",
    "normalize_transaction",
    "normalize_receipt",
    "normalize_batch",
    "try_normalize",
    "deduplicate",
    "scan_statement",
    "scan_receipt",
]
