"""
WealthWise package.

This package provides tools to:
- Record income and expense transactions in a key-value backed store
- Compute balances and category breakdowns
- Generate advisory insights
- Answer questions through a rule-based assistant and a small CLI / chat
"""

__all__ = [
    "config",
    "i18n",
    "models",
    "storage",
    "transactions",
    "validation",
    "analytics",
    "formatting",
    "insights",
    "assistant",
    "chatbot",
    "cli",
]
