"""Rule-based finance assistant for WealthWise.

Free-text questions are classified by keyword matching into a fixed set of
intents, each answered from a response template filled in with figures from
the user's transactions. There is no model inference involved.

Intents are tried in order and the first match wins:

1. balance     - balance / status / savings rate / net worth
2. comparison  - two or more categories plus "vs" / "compare" / "more than"
3. spending    - spent / expense / cost, narrowed by time window and category
4. market      - market keywords, never when "savings rate" is asked about
5. fallback    - capabilities / help text

The time window ("today", "yesterday", "this month", "all-time") is read from
the query up front and only narrows the spending intent.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence

import pandas as pd

from .analytics import (
    WINDOW_ALL_TIME,
    WINDOW_THIS_MONTH,
    WINDOW_TODAY,
    WINDOW_YESTERDAY,
    category_totals,
    expenses_only,
    filter_by_window,
    financials_from_frame,
    resolve_now,
    transactions_to_frame,
)
from .config import Config
from .formatting import format_currency, format_date, format_percent
from .i18n import get_translator
from .models import Transaction

logger = logging.getLogger(__name__)

# Order matters: comparison winners and the spending target follow it.
CATEGORY_KEYWORDS = (
    "food",
    "housing",
    "transport",
    "utilities",
    "entertainment",
    "shopping",
    "health",
    "salary",
    "freelance",
    "other",
)
BALANCE_KEYWORDS = ("balance", "status", "savings rate", "net worth")
COMPARISON_KEYWORDS = ("vs", "compare", "more than")
SPENDING_KEYWORDS = ("spent", "expense", "cost")
SAVINGS_RATE_PHRASE = "savings rate"
MARKET_PATTERN = re.compile(r"interest rate|mortgage|stock|market|price|inflation|crypto|invest")


@dataclass
class QueryContext:
    """Everything an intent needs to decide and answer."""

    query: str
    lowered: str
    transactions: Sequence[Transaction]
    frame: pd.DataFrame
    mentioned_categories: List[str]
    time_window: str
    now: pd.Timestamp
    config: Config
    t: Callable[..., str]

    def money(self, value: float) -> str:
        return format_currency(value, self.config.ui.currency_symbol)


@dataclass(frozen=True)
class Intent:
    """A named (predicate, handler) pair in the intent table."""

    name: str
    matches: Callable[[QueryContext], bool]
    respond: Callable[[QueryContext], str]


# ---------------------------------------------------------------------------
# Query parsing
# ---------------------------------------------------------------------------


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def find_mentioned_categories(query: str) -> List[str]:
    """Category names appearing anywhere in ``query``, in table order."""
    lowered = (query or "").lower()
    return [name for name in CATEGORY_KEYWORDS if name in lowered]


def detect_time_window(query: str) -> str:
    lowered = (query or "").lower()
    if "today" in lowered:
        return WINDOW_TODAY
    if "yesterday" in lowered:
        return WINDOW_YESTERDAY
    if "month" in lowered:
        return WINDOW_THIS_MONTH
    return WINDOW_ALL_TIME


# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------


def _is_balance_query(ctx: QueryContext) -> bool:
    return _contains_any(ctx.lowered, BALANCE_KEYWORDS)


def _balance_response(ctx: QueryContext) -> str:
    financials = financials_from_frame(ctx.frame)
    savings_rate = financials.savings_rate_pct

    if savings_rate < ctx.config.assistant.savings_advisory_rate_pct:
        status_line = ctx.t("assistant.balance.advisory")
    else:
        status_line = ctx.t("assistant.balance.healthy")

    return ctx.t(
        "assistant.balance.body",
        date=format_date(ctx.now, ctx.config.ui.date_format),
        balance=ctx.money(financials.balance),
        savings_rate=format_percent(savings_rate, 1),
        n_records=len(ctx.transactions),
        status_line=status_line,
    )


def _is_comparison_query(ctx: QueryContext) -> bool:
    return len(ctx.mentioned_categories) >= 2 and _contains_any(ctx.lowered, COMPARISON_KEYWORDS)


def _comparison_response(ctx: QueryContext) -> str:
    totals = category_totals(ctx.frame, ctx.mentioned_categories)

    parts = [ctx.t("assistant.comparison.heading")]
    for name in ctx.mentioned_categories:
        parts.append(
            ctx.t("assistant.comparison.item_line", category=name.upper(), amount=ctx.money(totals[name]))
        )

    # A later category only takes over on a strictly larger total.
    winner = ctx.mentioned_categories[0]
    for name in ctx.mentioned_categories[1:]:
        if totals[name] > totals[winner]:
            winner = name

    parts.append(ctx.t("assistant.comparison.winner", category=winner.upper()))
    return "".join(parts)


def _is_spending_query(ctx: QueryContext) -> bool:
    return _contains_any(ctx.lowered, SPENDING_KEYWORDS)


def _spending_response(ctx: QueryContext) -> str:
    expenses = filter_by_window(expenses_only(ctx.frame), ctx.time_window, ctx.now)
    target = ctx.mentioned_categories[0] if ctx.mentioned_categories else None
    if target is not None:
        expenses = expenses.loc[expenses["category"].str.lower() == target]

    total = float(expenses["amount"].sum())
    if total > ctx.config.assistant.high_volume_threshold:
        tip = ctx.t("assistant.spending.high_volume_tip")
    else:
        tip = ctx.t("assistant.spending.normal_tip")

    return ctx.t(
        "assistant.spending.body",
        target=target or ctx.t("assistant.spending.overall"),
        window=ctx.time_window,
        total=ctx.money(total),
        count=len(expenses),
        tip=tip,
    )


def _is_market_query(ctx: QueryContext) -> bool:
    if SAVINGS_RATE_PHRASE in ctx.lowered:
        return False
    return MARKET_PATTERN.search(ctx.lowered) is not None


def _market_response(ctx: QueryContext) -> str:
    return ctx.t("assistant.market.body", query=ctx.query)


def _fallback_response(ctx: QueryContext) -> str:
    return ctx.t("assistant.fallback.body")


INTENTS: Sequence[Intent] = (
    Intent("balance", _is_balance_query, _balance_response),
    Intent("comparison", _is_comparison_query, _comparison_response),
    Intent("spending", _is_spending_query, _spending_response),
    Intent("market", _is_market_query, _market_response),
)

FALLBACK_INTENT = Intent("fallback", lambda ctx: True, _fallback_response)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_query_context(
    query: str,
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
    config: Optional[Config] = None,
    language: Optional[str] = None,
) -> QueryContext:
    cfg = config or Config()
    query = query or ""
    lowered = query.lower()
    return QueryContext(
        query=query,
        lowered=lowered,
        transactions=transactions,
        frame=transactions_to_frame(transactions),
        mentioned_categories=find_mentioned_categories(lowered),
        time_window=detect_time_window(lowered),
        now=resolve_now(now),
        config=cfg,
        t=get_translator(language or cfg.ui.language),
    )


def match_intent(ctx: QueryContext) -> Intent:
    """Return the first intent whose predicate accepts ``ctx``."""
    for intent in INTENTS:
        if intent.matches(ctx):
            return intent
    return FALLBACK_INTENT


def classify_intent(
    query: str,
    transactions: Sequence[Transaction] = (),
    now: Optional[datetime] = None,
) -> str:
    """Name of the intent that would answer ``query``."""
    return match_intent(build_query_context(query, transactions, now=now)).name


def generate_response(
    query: str,
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
    config: Optional[Config] = None,
    language: Optional[str] = None,
) -> str:
    """Answer ``query`` from ``transactions``.

    Parameters
    ----------
    query:
        Free-text question; matching is case-insensitive.
    transactions:
        The user's transactions (may be empty).
    now:
        Reference time for "today" / "yesterday" / "this month" and the
        report date. Defaults to the current local time.
    config:
        Thresholds, currency symbol and date format. Defaults apply if None.
    language:
        Catalogue language; defaults to ``config.ui.language``.

    Returns
    -------
    str
        Markdown-formatted answer ending with the disclaimer.
    """
    ctx = build_query_context(query, transactions, now=now, config=config, language=language)
    intent = match_intent(ctx)
    logger.debug(
        "WW ASSISTANT: intent=%s window=%s categories=%s",
        intent.name,
        ctx.time_window,
        ctx.mentioned_categories,
    )
    return intent.respond(ctx) + ctx.t("assistant.disclaimer")
