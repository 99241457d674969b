"""Tests for prompt construction."""
import unittest
from datetime import date
from decimal import Decimal

from finscan.llm.models import CATEGORIES, FinancialSummary, TaskKind
from finscan.llm.prompts import build_chat_prompt, build_prompt, build_receipt_prompt, build_statement_prompt


class TestPrompts(unittest.TestCase):
    """Test PromptBuilder output."""

    def test_receipt_prompt_embeds_text_and_categories(self):
        prompt = build_receipt_prompt("CORNER DELI TOTAL 9.25")

        self.assertIn("CORNER DELI TOTAL 9.25", prompt)
        for category in CATEGORIES:
            self.assertIn(category, prompt)
        self.assertIn("YYYY-MM-DD", prompt)

    def test_statement_prompt_instructions(self):
        prompt = build_statement_prompt("Rent 1200", today=date(2026, 4, 1))

        self.assertIn("Rent 1200", prompt)
        self.assertIn("unstructured", prompt)
        self.assertIn("UNIQUE", prompt)
        self.assertIn("OMIT", prompt)
        self.assertIn("2026-04-01", prompt)
        self.assertIn('"Transaction"', prompt)
        self.assertIn("JSON array", prompt)

    def test_build_prompt_dispatch(self):
        self.assertEqual(build_prompt(TaskKind.RECEIPT, "abc"), build_receipt_prompt("abc"))
        self.assertEqual(
            build_prompt(TaskKind.STATEMENT, "abc", today=date(2026, 4, 1)),
            build_statement_prompt("abc", today=date(2026, 4, 1))
        )

    def test_prompts_are_pure(self):
        self.assertEqual(
            build_statement_prompt("x", today=date(2026, 1, 1)),
            build_statement_prompt("x", today=date(2026, 1, 1))
        )

    def test_chat_prompt_summary(self):
        summary = FinancialSummary(
            total_income=Decimal("4000"),
            total_expenses=Decimal("3000"),
            categories={"food": Decimal("500"), "housing": Decimal("2000"), "other": Decimal("500")},
        )
        prompt = build_chat_prompt("How can I save more?", summary)

        self.assertIn("Total Income: $4000.00", prompt)
        self.assertIn("Total Expenses: $3000.00", prompt)
        self.assertIn("Current Balance: $1000.00", prompt)
        self.assertIn("Savings Rate: 25.0%", prompt)
        self.assertIn("How can I save more?", prompt)
        self.assertLess(prompt.index("housing"), prompt.index("food"))

    def test_chat_prompt_without_income(self):
        summary = FinancialSummary(total_income=Decimal("0"), total_expenses=Decimal("50"))
        prompt = build_chat_prompt("hi", summary)

        self.assertIn("Savings Rate: 0.0%", prompt)
        self.assertIn("Expense Breakdown: none recorded", prompt)


if __name__ == "__main__":
    unittest.main()
