"""Prompt construction for receipt, statement and chat tasks."""
from datetime import date
from typing import Optional

from .models import CATEGORIES, FinancialSummary, TaskKind

_CATEGORY_LIST = ", ".join(CATEGORIES)


def build_receipt_prompt(text: str) -> str:
    """Build prompt asking for one JSON object describing a receipt."""
    return f"""Extract the following information from this receipt text and return it as a JSON object:
{{
  "amount": total amount (number only, no currency symbol),
  "date": "date in YYYY-MM-DD format",
  "merchant": "store or merchant name",
  "category": "one of: {_CATEGORY_LIST}",
  "description": "brief description of the purchase",
  "items": ["list of items purchased"]
}}

Receipt text:
{text}

Return ONLY the JSON object. Do not include any explanations or markdown formatting."""


def build_statement_prompt(text: str, today: Optional[date] = None) -> str:
    """Build prompt asking for a JSON array of unique statement transactions."""
    today = today or date.today()
    return f"""You are a financial data extraction expert. Analyze the text below and extract ALL unique financial transactions.

The text is arbitrary and may be unstructured: tables, lists, paragraphs or scattered values,
with any currency symbol ($, ₹, €, £, ...), any date format and any amount format.

Rules:
1. Return UNIQUE transactions only. If the same transaction appears several times, include it ONCE.
2. If a transaction has no recognizable amount, OMIT it. Never invent an amount and never use 0.
3. Missing date: use today's date ({today.isoformat()}).
4. Missing or unclear description: use "Transaction" followed by the amount.
5. Missing or unclear type: use "expense".
6. Missing or unclear category: use "Other".

For each transaction return:
{{
  "date": "YYYY-MM-DD",
  "description": "text describing the transaction",
  "amount": number (positive, no currency symbol),
  "type": "income" or "expense",
  "category": one of {_CATEGORY_LIST}
}}

Text to analyze:
{text}

Return ONLY a JSON array of transactions, with no text before or after it.
If no valid transactions are found, return an empty array: []"""


def build_chat_prompt(message: str, summary: FinancialSummary) -> str:
    """Build assistant prompt carrying the user's financial profile."""
    breakdown = ", ".join(
        f"{category}: ${amount:.2f}"
        for category, amount in sorted(summary.categories.items(), key=lambda kv: kv[1], reverse=True)
    ) or "none recorded"

    return f"""You are a helpful AI assistant. You can help with general questions and provide financial advice when relevant.

USER'S FINANCIAL PROFILE (for financial questions only):
- Total Income: ${summary.total_income:.2f}
- Total Expenses: ${summary.total_expenses:.2f}
- Current Balance: ${summary.balance:.2f}
- Expense Breakdown: {breakdown}
- Savings Rate: {summary.savings_rate:.1f}%
- Monthly Surplus/Deficit: ${summary.balance:.2f}

INSTRUCTIONS:
1. If the user asks a general question (not financial), answer it directly and helpfully
2. If the user asks about finances, budgeting, spending or savings, give personalized advice using their data
3. For financial questions, give specific, actionable recommendations

USER QUESTION: {message}

Please provide a helpful response:"""


def build_prompt(kind: TaskKind, text: str, today: Optional[date] = None) -> str:
    """Build the extraction prompt for a task kind."""
    if kind is TaskKind.RECEIPT:
        return build_receipt_prompt(text)
    if kind is TaskKind.STATEMENT:
        return build_statement_prompt(text, today)
    raise ValueError(f"Unknown task kind: {kind}")
