"""Pattern-based transaction scanning for when the model yields nothing.

There is no semantic understanding here, only regular expressions: every
statement candidate is an expense in category "other" dated today.

Known limitation: the bare-number pass happily picks up dates, quantities
and phone numbers that fall in its range. Amount patterns are ASCII-only,
so a number glued to an accented letter ("Café12") still counts.
"""
import re
from datetime import date
from decimal import Decimal
from typing import List, Optional

from finscan.utils.logger import get_logger
from .models import DEFAULT_CATEGORY, DEFAULT_TYPE, ReceiptExtraction, TransactionCandidate, format_amount
from .dedup import deduplicate
from .normalizer import parse_date

logger = get_logger()

CURRENCY_AMOUNT_RE = re.compile(r"[$₹€£]\s*(\d+\.?\d*)", re.ASCII)
BARE_NUMBER_RE = re.compile(r"\b(\d+\.?\d*)\b", re.ASCII)
_BARE_NUMBER_STRIP_RE = re.compile(r"\d+\.?\d*", re.ASCII)
_PUNCTUATION_RE = re.compile(r"[^\w\s]")

MIN_CURRENCY_AMOUNT = Decimal("0.01")
BARE_AMOUNT_RANGE = (Decimal("1"), Decimal("100000"))
MAX_DESCRIPTION_LENGTH = 50

_RECEIPT_AMOUNT_RE = re.compile(r"\$?\s*(\d+\.\d{2})", re.ASCII)
_RECEIPT_DATE_RE = re.compile(r"\d{1,2}[/-]\d{1,2}[/-]\d{2,4}", re.ASCII)
_RECEIPT_MERCHANT_RE = re.compile(r"^[A-Z][A-Z ]+", re.MULTILINE)


def _describe(lines: List[str], index: int, strip_re: re.Pattern, amount: Decimal) -> str:
    """Description from the line minus amounts, else a neighbouring line."""
    description = strip_re.sub("", lines[index]).strip()
    if not description and index > 0:
        description = lines[index - 1].strip()
    if not description and index < len(lines) - 1:
        description = lines[index + 1].strip()

    description = _PUNCTUATION_RE.sub("", description).strip()
    description = description[:MAX_DESCRIPTION_LENGTH]
    return description or f"Transaction {format_amount(amount)}"


def _scan(
    lines: List[str],
    pattern: re.Pattern,
    strip_re: re.Pattern,
    accept,
    today: date,
) -> List[TransactionCandidate]:
    found = []
    for i, line in enumerate(lines):
        for match in pattern.finditer(line):
            amount = Decimal(match.group(1))
            if not accept(amount):
                continue
            found.append(TransactionCandidate(
                date=today,
                description=_describe(lines, i, strip_re, amount),
                amount=amount,
                type=DEFAULT_TYPE,
                category=DEFAULT_CATEGORY,
            ))
    return found


def scan_statement(text: str, today: Optional[date] = None) -> List[TransactionCandidate]:
    """
    Scan statement text for transaction candidates.

    Currency-marked amounts are tried first; standalone numbers are only
    considered when no currency-marked amount exists anywhere in the text.

    Args:
        text: Extracted statement text
        today: Date stamped on every candidate

    Returns:
        Unique candidates in order of appearance (possibly empty)
    """
    today = today or date.today()
    lines = [line for line in text.split("\n") if line.strip()]

    candidates = _scan(
        lines,
        CURRENCY_AMOUNT_RE,
        CURRENCY_AMOUNT_RE,
        lambda amount: amount > MIN_CURRENCY_AMOUNT,
        today,
    )
    source = "currency"

    if not candidates:
        low, high = BARE_AMOUNT_RANGE
        candidates = _scan(
            lines,
            BARE_NUMBER_RE,
            _BARE_NUMBER_STRIP_RE,
            lambda amount: low < amount < high,
            today,
        )
        source = "bare-number"

    unique = deduplicate(candidates)
    logger.info(f"Fallback scan ({source} pass) found {len(unique)} unique potential transactions")
    return unique


def scan_receipt(text: str, today: Optional[date] = None) -> ReceiptExtraction:
    """Basic receipt scan: first money amount, first date, first all-caps line."""
    amount_match = _RECEIPT_AMOUNT_RE.search(text)
    date_match = _RECEIPT_DATE_RE.search(text)
    merchant_match = _RECEIPT_MERCHANT_RE.search(text)

    receipt_date = parse_date(date_match.group(0)) if date_match else None
    merchant = merchant_match.group(0).strip() if merchant_match else None

    return ReceiptExtraction(
        amount=Decimal(amount_match.group(1)) if amount_match else None,
        date=receipt_date or today or date.today(),
        merchant=merchant or None,
        category=DEFAULT_CATEGORY,
        description="Receipt purchase",
        items=[],
    )
