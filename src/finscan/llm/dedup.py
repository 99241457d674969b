"""Duplicate removal within one extraction batch."""
from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, TypeVar

from finscan.utils.logger import get_logger
from .models import TransactionCandidate, provenance_key
from .normalizer import coerce_amount

logger = get_logger()

T = TypeVar("T")


def record_key(record: Any) -> str:
    """Key for a parsed model record: coerced amount, raw description."""
    if isinstance(record, TransactionCandidate):
        return record.provenance_key
    if not isinstance(record, Mapping):
        return f"None-{record!r}"
    return provenance_key(coerce_amount(record.get("amount")), record.get("description"))


def deduplicate(records: Iterable[T], key: Callable[[T], str] = record_key) -> List[T]:
    """Drop records whose key was already seen, keeping first-seen order."""
    seen = set()
    unique: List[T] = []
    total = 0

    for record in records:
        total += 1
        record_id = key(record)
        if record_id in seen:
            continue
        seen.add(record_id)
        unique.append(record)

    if total != len(unique):
        logger.info(f"Removed {total - len(unique)} duplicate transactions ({len(unique)} unique)")
    return unique
