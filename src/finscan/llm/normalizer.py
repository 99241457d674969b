"""Validation and defaulting of loosely-typed transaction records.

This is the one place that decides whether a row is a valid transaction.
It serves both the model output path and user-submitted bulk rows:

- amount must coerce to a finite positive number, otherwise the row is
  rejected (never defaulted to zero);
- date falls back to today;
- description falls back to "Transaction <amount>" (or is required, for
  user rows);
- type falls back to "expense", category to "other" (stored lowercase).
"""
import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Tuple, Union

from finscan.utils.logger import get_logger
from finscan.utils.exceptions import InvalidCandidate
from .models import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    DEFAULT_TYPE,
    TRANSACTION_TYPES,
    ReceiptExtraction,
    Rejection,
    TransactionCandidate,
    format_amount,
)

logger = get_logger()

_CATEGORY_LOOKUP = {name.lower(): name.lower() for name in CATEGORIES}
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_CURRENCY_CHARS = "$₹€£"

DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%m-%d-%y",
    # Day-first only when the month-first reading is impossible (day > 12)
    "%d/%m/%Y",
    "%d/%m/%y",
    "%d-%m-%Y",
    "%d-%m-%y",
    "%d.%m.%Y",
    "%d.%m.%y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
]


def coerce_amount(value: Any) -> Optional[Decimal]:
    """Coerce a loosely-typed amount to a finite Decimal, or None."""
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip().lstrip(_CURRENCY_CHARS).strip().replace(",", "")
        match = _LEADING_NUMBER_RE.match(cleaned)
        if not match:
            return None
        try:
            amount = Decimal(match.group(0))
        except InvalidOperation:
            return None
    else:
        return None

    return amount if amount.is_finite() else None


def parse_date(value: Any) -> Optional[date]:
    """Parse ISO-8601 or a common dated string, slashes month-first; None when unrecognized."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None


def normalize_category(value: Any) -> str:
    """Case-insensitive match against the closed set; lowercase, default other."""
    if isinstance(value, str):
        return _CATEGORY_LOOKUP.get(value.strip().lower(), DEFAULT_CATEGORY)
    return DEFAULT_CATEGORY


def normalize_type(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in TRANSACTION_TYPES:
        return value.strip().lower()
    return DEFAULT_TYPE


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _clean_items(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def normalize_transaction(
    raw: Any,
    *,
    require_description: bool = False,
    today: Optional[date] = None,
) -> TransactionCandidate:
    """
    Turn one loosely-typed record into a TransactionCandidate.

    Args:
        raw: Parsed model record or user-submitted row
        require_description: Reject rows with no description instead of
            synthesizing one
        today: Date used when none can be recovered

    Returns:
        A candidate with positive amount and non-empty description

    Raises:
        InvalidCandidate: With the rejection reason
    """
    if not isinstance(raw, Mapping):
        raise InvalidCandidate("Invalid transaction data")

    amount = coerce_amount(raw.get("amount"))
    if amount is None or amount <= 0:
        raise InvalidCandidate("Invalid amount")

    description = _clean_text(raw.get("description"))
    if not description:
        if require_description:
            raise InvalidCandidate("Missing description")
        description = f"Transaction {format_amount(amount)}"

    merchant = _clean_text(raw.get("merchant")) or None

    return TransactionCandidate(
        date=parse_date(raw.get("date")) or today or date.today(),
        description=description,
        amount=amount,
        type=normalize_type(raw.get("type")),
        category=normalize_category(raw.get("category")),
        merchant=merchant,
        items=_clean_items(raw.get("items")),
    )


def try_normalize(
    raw: Any,
    index: int,
    **kwargs,
) -> Union[TransactionCandidate, Rejection]:
    """Normalize one row, returning a Rejection instead of raising."""
    try:
        return normalize_transaction(raw, **kwargs)
    except InvalidCandidate as e:
        return Rejection(index=index, reason=e.reason)


def normalize_batch(
    rows: Iterable[Any],
    **kwargs,
) -> Tuple[List[TransactionCandidate], List[Rejection]]:
    """Normalize rows independently; one bad row never stops the batch."""
    candidates: List[TransactionCandidate] = []
    rejections: List[Rejection] = []

    for index, raw in enumerate(rows):
        result = try_normalize(raw, index, **kwargs)
        if isinstance(result, Rejection):
            logger.debug(f"Row {index} rejected: {result.reason}")
            rejections.append(result)
        else:
            candidates.append(result)

    return candidates, rejections


def normalize_receipt(raw: Mapping, today: Optional[date] = None) -> ReceiptExtraction:
    """
    Apply the field rules to a single-receipt record.

    Unlike normalize_transaction, a missing or non-positive amount yields
    amount=None so the caller can fall back to a text scan.
    """
    amount = coerce_amount(raw.get("amount"))
    if amount is not None and amount <= 0:
        amount = None

    return ReceiptExtraction(
        amount=amount,
        date=parse_date(raw.get("date")) or today or date.today(),
        merchant=_clean_text(raw.get("merchant")) or None,
        category=normalize_category(raw.get("category")),
        description=_clean_text(raw.get("description")) or "Receipt purchase",
        items=_clean_items(raw.get("items")),
    )
