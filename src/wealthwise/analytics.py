"""Aggregations over transaction lists for WealthWise.

Responsibilities:
- Convert transactions into a pandas DataFrame with parsed dates
- Compute derived financials (income, expense, balance)
- Compute expense totals per category (dashboard breakdown, assistant)
- Filter expenses to a time window (today, yesterday, this month)

All functions are pure: they take transactions/DataFrames and return data
structures without printing or doing I/O.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, Optional, Sequence

import pandas as pd

from .models import Financials, Transaction, TransactionType

COLUMNS = ["id", "description", "amount", "type", "category", "date"]

WINDOW_ALL_TIME = "all-time"
WINDOW_TODAY = "today"
WINDOW_YESTERDAY = "yesterday"
WINDOW_THIS_MONTH = "this month"


# ---------------------------------------------------------------------------
# Frame construction
# ---------------------------------------------------------------------------


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Build a DataFrame with one row per transaction.

    Columns: id, description, amount (float), type and category (string
    values), date (tz-aware UTC datetime; unparseable dates become NaT).
    Row order follows the input order.
    """
    records = [t.to_dict() for t in transactions]
    df = pd.DataFrame.from_records(records, columns=COLUMNS)
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0).astype(float)
    df["date"] = pd.to_datetime(df["date"], utc=True, errors="coerce", format="ISO8601")
    return df


def expenses_only(df: pd.DataFrame) -> pd.DataFrame:
    return df.loc[df["type"] == TransactionType.EXPENSE.value]


def income_only(df: pd.DataFrame) -> pd.DataFrame:
    return df.loc[df["type"] == TransactionType.INCOME.value]


# ---------------------------------------------------------------------------
# Financials
# ---------------------------------------------------------------------------


def financials_from_frame(df: pd.DataFrame) -> Financials:
    income = float(income_only(df)["amount"].sum())
    expense = float(expenses_only(df)["amount"].sum())
    return Financials(income=income, expense=expense, balance=income - expense)


def compute_financials(transactions: Sequence[Transaction]) -> Financials:
    """Total income, total expense and their difference."""
    return financials_from_frame(transactions_to_frame(transactions))


# ---------------------------------------------------------------------------
# Category metrics
# ---------------------------------------------------------------------------


def expense_total(df: pd.DataFrame, category: Optional[str] = None) -> float:
    """Sum of expense amounts, optionally for one category (case-insensitive)."""
    expenses = expenses_only(df)
    if category is not None:
        expenses = expenses.loc[expenses["category"].str.lower() == category.lower()]
    return float(expenses["amount"].sum())


def compute_category_breakdown(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """Expense totals grouped by category, largest first.

    Returns:
        DataFrame with columns: category, amount, share_pct, count.
        Equal totals keep the order in which categories first appear.
    """
    expenses = expenses_only(transactions_to_frame(transactions))
    if expenses.empty:
        return pd.DataFrame(columns=["category", "amount", "share_pct", "count"])

    grouped = (
        expenses.groupby("category", sort=False)["amount"]
        .agg(amount="sum", count="count")
        .reset_index()
    )
    total = float(grouped["amount"].sum())
    grouped["share_pct"] = (grouped["amount"] / total * 100.0) if total > 0 else 0.0
    grouped = grouped.sort_values("amount", ascending=False, kind="mergesort")
    return grouped[["category", "amount", "share_pct", "count"]].reset_index(drop=True)


def category_totals(df: pd.DataFrame, categories: Sequence[str]) -> Dict[str, float]:
    """Expense total per requested category name, in the requested order."""
    return {name: expense_total(df, name) for name in categories}


# ---------------------------------------------------------------------------
# Time windows
# ---------------------------------------------------------------------------


def resolve_now(now: Optional[datetime] = None) -> pd.Timestamp:
    """Return ``now`` as a tz-aware Timestamp (local time when not given).

    Naive datetimes are taken to be UTC.
    """
    if now is None:
        now = datetime.now().astimezone()
    ts = pd.Timestamp(now)
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts


def filter_by_window(
    df: pd.DataFrame,
    window: str,
    now: Optional[datetime] = None,
) -> pd.DataFrame:
    """Keep rows whose date falls in ``window``, judged in the timezone of ``now``.

    - today / yesterday: same calendar day.
    - this month: strictly after the start of the current month.
    - anything else: no filtering (rows with unparseable dates included).
    """
    if window not in {WINDOW_TODAY, WINDOW_YESTERDAY, WINDOW_THIS_MONTH}:
        return df

    now_ts = resolve_now(now)
    # Naive wall-clock times in the zone of `now`.
    local_dates = df["date"].dt.tz_convert(now_ts.tzinfo).dt.tz_localize(None)
    day_start = now_ts.tz_localize(None).normalize()

    if window == WINDOW_TODAY:
        mask = local_dates.dt.normalize() == day_start
    elif window == WINDOW_YESTERDAY:
        mask = local_dates.dt.normalize() == day_start - pd.Timedelta(days=1)
    else:
        month_start = day_start.replace(day=1)
        mask = local_dates > month_start

    return df.loc[mask.fillna(False).astype(bool)]
