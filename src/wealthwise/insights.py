"""Insight generation for WealthWise.

This module turns a transaction list into human-readable text:

- ``generate_insights``: a short list of advisory strings (0-3 items), one
  per rule that fires. Rules are independent and evaluated in a fixed order.
- ``generate_dashboard_report``: a multi-section text report combining the
  financials, the category breakdown, the insights and recent activity.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import pandas as pd

from .analytics import (
    compute_category_breakdown,
    expenses_only,
    financials_from_frame,
    transactions_to_frame,
)
from .config import Config, InsightsConfig
from .formatting import format_currency, format_percent
from .i18n import get_translator
from .models import Transaction, TransactionCategory


# ---------------------------------------------------------------------------
# Advisory rules
# ---------------------------------------------------------------------------

InsightRule = Callable[[pd.DataFrame, InsightsConfig, Callable[..., str], str], Optional[str]]


def _savings_rate_rule(
    df: pd.DataFrame, cfg: InsightsConfig, t: Callable[..., str], symbol: str
) -> Optional[str]:
    financials = financials_from_frame(df)
    if financials.expense > financials.income:
        return t("insights.expenses_exceed_income")
    if financials.income > 0 and financials.expense > financials.income * cfg.low_savings_ratio:
        return t("insights.low_savings")
    if financials.income > 0:
        return t("insights.healthy_savings")
    return None


def _food_spending_rule(
    df: pd.DataFrame, cfg: InsightsConfig, t: Callable[..., str], symbol: str
) -> Optional[str]:
    expenses = expenses_only(df)
    food_total = float(
        expenses.loc[expenses["category"] == TransactionCategory.FOOD.value, "amount"].sum()
    )
    if food_total > cfg.food_spending_limit:
        return t("insights.high_food_spending", limit=f"{symbol}{cfg.food_spending_limit:,.0f}")
    return None


def _subscription_rule(
    df: pd.DataFrame, cfg: InsightsConfig, t: Callable[..., str], symbol: str
) -> Optional[str]:
    expenses = expenses_only(df)
    is_subscription = expenses["description"].str.lower().str.contains("subscription", regex=False)
    is_entertainment = expenses["category"] == TransactionCategory.ENTERTAINMENT.value
    mask = (is_subscription.fillna(False) | is_entertainment).astype(bool)
    total = float(expenses.loc[mask, "amount"].sum())
    if total > cfg.subscription_spending_limit:
        return t("insights.subscriptions_adding_up")
    return None


INSIGHT_RULES: Sequence[InsightRule] = (
    _savings_rate_rule,
    _food_spending_rule,
    _subscription_rule,
)


def generate_insights(
    transactions: Sequence[Transaction],
    config: Optional[Config] = None,
    language: Optional[str] = None,
) -> List[str]:
    """Return the advisory strings that apply to ``transactions``.

    Each rule contributes at most one string; an empty list of transactions
    gives an empty list of insights.
    """
    cfg = config or Config()
    t = get_translator(language or cfg.ui.language)
    df = transactions_to_frame(transactions)

    insights: List[str] = []
    for rule in INSIGHT_RULES:
        message = rule(df, cfg.insights, t, cfg.ui.currency_symbol)
        if message:
            insights.append(message)
    return insights


# ---------------------------------------------------------------------------
# Dashboard report
# ---------------------------------------------------------------------------


def _overview_section(df: pd.DataFrame, t: Callable[..., str], symbol: str) -> str:
    financials = financials_from_frame(df)
    lines = [
        t("report.overview.income", income=format_currency(financials.income, symbol)),
        t("report.overview.expense", expense=format_currency(financials.expense, symbol)),
        t("report.overview.balance", balance=format_currency(financials.balance, symbol)),
        t(
            "report.overview.savings_rate",
            savings_rate=format_percent(financials.savings_rate_pct),
        ),
        t("report.overview.n_transactions", n_transactions=len(df)),
    ]
    return "\n".join(lines)


def _categories_section(
    transactions: Sequence[Transaction], t: Callable[..., str], symbol: str
) -> str:
    breakdown = compute_category_breakdown(transactions)
    if breakdown.empty:
        return t("report.categories.none")

    lines: List[str] = []
    for _, row in breakdown.iterrows():
        lines.append(
            t(
                "report.categories.item_line",
                category=row["category"],
                amount=format_currency(float(row["amount"]), symbol),
                share=format_percent(float(row["share_pct"])),
                count=int(row["count"]),
            )
        )
    return "\n".join(lines)


def _recent_section(
    transactions: Sequence[Transaction],
    t: Callable[..., str],
    symbol: str,
    limit: int,
) -> str:
    if not transactions:
        return t("report.recent.none")

    lines: List[str] = []
    for txn in list(transactions)[: max(0, limit)]:
        lines.append(
            t(
                "report.recent.item_line",
                date=txn.date[:10],
                sign="+" if txn.is_income else "-",
                amount=format_currency(txn.amount, symbol),
                description=txn.description,
                category=txn.category.value,
                id=txn.id,
            )
        )
    return "\n".join(lines)


def generate_dashboard_report(
    transactions: Sequence[Transaction],
    language: Optional[str] = None,
    config: Optional[Config] = None,
) -> str:
    """Generate the full dashboard report.

    Sections:
    - Overview
    - Spending by category
    - Insights
    - Recent transactions
    """
    cfg = config or Config()
    language = language or cfg.ui.language
    t = get_translator(language)
    symbol = cfg.ui.currency_symbol
    df = transactions_to_frame(transactions)

    insights = generate_insights(transactions, config=cfg, language=language)
    insights_txt = "\n".join(f"- {line}" for line in insights) if insights else t("report.insights.none")

    sections: List[str] = [
        t("report.title"),
        t("report.underline"),
        "",
        t("report.section.overview"),
        "-----------",
        _overview_section(df, t, symbol),
        "",
        t("report.section.categories"),
        "----------------------",
        _categories_section(transactions, t, symbol),
        "",
        t("report.section.insights"),
        "-----------",
        insights_txt,
        "",
        t("report.section.recent"),
        "-----------------------",
        _recent_section(transactions, t, symbol, cfg.ui.recent_transactions),
    ]

    return "\n".join(sections)
