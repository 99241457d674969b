"""Tests for batch deduplication."""
import unittest
from datetime import date
from decimal import Decimal

from finscan.llm.dedup import deduplicate, record_key
from finscan.llm.models import TransactionCandidate, provenance_key


class TestProvenanceKey(unittest.TestCase):
    """Test the amount-description identity."""

    def test_canonical_amount_text(self):
        self.assertEqual(provenance_key(Decimal("45.20"), "Grocery Store"), "45.2-Grocery Store")
        self.assertEqual(provenance_key(Decimal("100"), "Rent"), "100-Rent")
        self.assertEqual(provenance_key(Decimal("1E+2"), "Rent"), "100-Rent")

    def test_record_key_coerces_amount(self):
        self.assertEqual(record_key({"amount": "5.00", "description": "x"}), record_key({"amount": 5, "description": "x"}))

    def test_record_key_uses_raw_description(self):
        self.assertNotEqual(
            record_key({"amount": 5, "description": "x"}),
            record_key({"amount": 5, "description": " x"})
        )

    def test_candidate_key_matches_record_key(self):
        candidate = TransactionCandidate(date=date(2026, 1, 1), description="Coffee", amount=Decimal("4.50"))
        self.assertEqual(candidate.provenance_key, record_key({"amount": 4.5, "description": "Coffee"}))
        self.assertEqual(record_key(candidate), "4.5-Coffee")


class TestDeduplicate(unittest.TestCase):
    """Test order-preserving deduplication."""

    def test_first_seen_order(self):
        a = {"amount": 5, "description": "x", "id": "A"}
        b = {"amount": 5, "description": "x", "id": "B"}
        c = {"amount": 7, "description": "x", "id": "C"}

        result = deduplicate([a, b, c])

        self.assertEqual([r["id"] for r in result], ["A", "C"])

    def test_recurring_purchase_collapses(self):
        rows = [
            {"amount": 5, "description": "Coffee", "date": "2026-01-01"},
            {"amount": 5, "description": "Coffee", "date": "2026-01-02"},
        ]
        self.assertEqual(len(deduplicate(rows)), 1)

    def test_candidates(self):
        today = date(2026, 1, 1)
        rows = [
            TransactionCandidate(date=today, description="Tea", amount=Decimal("3")),
            TransactionCandidate(date=today, description="Tea", amount=Decimal("3.00")),
            TransactionCandidate(date=today, description="Cake", amount=Decimal("3")),
        ]
        self.assertEqual([r.description for r in deduplicate(rows)], ["Tea", "Cake"])

    def test_empty(self):
        self.assertEqual(deduplicate([]), [])


if __name__ == "__main__":
    unittest.main()
