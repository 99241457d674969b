"""Data models for transaction extraction."""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

# Closed category set, display casing; stored lowercase
CATEGORIES = (
    "Food",
    "Transportation",
    "Housing",
    "Utilities",
    "Entertainment",
    "Healthcare",
    "Shopping",
    "Education",
    "Other",
)
DEFAULT_CATEGORY = "other"

TRANSACTION_TYPES = ("income", "expense")
DEFAULT_TYPE = "expense"


class TaskKind(str, Enum):
    """Extraction task a prompt is built for."""
    RECEIPT = "single-receipt"
    STATEMENT = "bulk-statement"


def format_amount(amount: Decimal) -> str:
    """Canonical decimal text: no exponent, no trailing zeros (45.20 -> 45.2)."""
    return format(Decimal(amount).normalize(), "f")


def provenance_key(amount: Optional[Decimal], description: Any) -> str:
    """
    Identity of a transaction within a batch: "<amount>-<description>".

    Coarse on purpose: two genuine same-amount, same-description purchases
    collapse into one.
    """
    amount_text = format_amount(amount) if amount is not None else "None"
    return f"{amount_text}-{description}"


@dataclass
class TransactionCandidate:
    """An extracted transaction awaiting user review."""
    date: date
    description: str
    amount: Decimal
    type: str = DEFAULT_TYPE
    category: str = DEFAULT_CATEGORY
    merchant: Optional[str] = None
    items: List[Any] = field(default_factory=list)

    @property
    def provenance_key(self) -> str:
        """Batch-local identity used for deduplication; never persisted."""
        return provenance_key(self.amount, self.description)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": float(self.amount),
            "type": self.type,
            "category": self.category,
            "merchant": self.merchant,
            "items": list(self.items),
        }


@dataclass
class ReceiptExtraction:
    """Single-receipt result; amount may be missing."""
    amount: Optional[Decimal]
    date: date
    merchant: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    description: str = "Receipt purchase"
    items: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": float(self.amount) if self.amount is not None else None,
            "date": self.date.isoformat(),
            "merchant": self.merchant,
            "category": self.category,
            "description": self.description,
            "items": list(self.items),
        }


@dataclass
class FinancialSummary:
    """Aggregate totals over a user's recent history (computed elsewhere)."""
    total_income: Decimal
    total_expenses: Decimal
    categories: Dict[str, Decimal] = field(default_factory=dict)

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def savings_rate(self) -> Decimal:
        """Balance as a percentage of income; zero without income."""
        if self.total_income <= 0:
            return Decimal("0")
        return self.balance / self.total_income * 100

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FinancialSummary":
        return cls(
            total_income=Decimal(str(data.get("totalIncome", data.get("total_income", 0)))),
            total_expenses=Decimal(str(data.get("totalExpenses", data.get("total_expenses", 0)))),
            categories={
                name: Decimal(str(value))
                for name, value in (data.get("categories") or {}).items()
            },
        )


@dataclass
class Rejection:
    """A bulk row refused by normalization."""
    index: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "reason": self.reason}


@dataclass
class StatementResult:
    """Bulk-statement extraction output."""
    transactions: List[TransactionCandidate]
    source: str  # "model", "fallback" or "none"

    def to_dict(self) -> Dict[str, Any]:
        return {"transactions": [txn.to_dict() for txn in self.transactions]}


@dataclass
class BulkCreateResult:
    """Outcome of saving a batch of user-approved rows."""
    saved_count: int
    invalid_count: int
    transactions: List[Any]
    invalid_transactions: List[Rejection]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "savedCount": self.saved_count,
            "invalidCount": self.invalid_count,
            "transactions": [
                txn.to_dict() if hasattr(txn, "to_dict") else txn
                for txn in self.transactions
            ],
            "invalidTransactions": [r.to_dict() for r in self.invalid_transactions],
        }
