from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from wealthwise.assistant import (
    INTENTS,
    _is_market_query,
    build_query_context,
    classify_intent,
    detect_time_window,
    find_mentioned_categories,
    generate_response,
)
from wealthwise.config import AssistantConfig, Config

DISCLAIMER = (
    "\n\n---\n*Disclaimer: AI-generated insight for educational use. "
    "Verify with a professional for critical financial moves.*"
)


def test_intent_table_order():
    assert [intent.name for intent in INTENTS] == ["balance", "comparison", "spending", "market"]


def test_balance_example(make_txn, now):
    transactions = [make_txn(5000, "income", "Salary"), make_txn(100, "expense", "Other")]

    answer = generate_response("What is my total balance and how much have I made?", transactions, now=now)

    assert "### Executive Financial Summary" in answer
    assert "As of 10/18/2026:" in answer
    assert "- **Net Liquidity (Balance)**: **$4,900.00**" in answer
    assert "- **Personal Savings Rate**: 98.0%" in answer
    assert "Verified against 2 local records." in answer
    assert "✅ **Status**: Your current margin is healthy." in answer
    assert answer.endswith(DISCLAIMER)


def test_balance_with_empty_list(now):
    answer = generate_response("What is my balance?", [], now=now)

    assert "**$0.00**" in answer
    assert "Personal Savings Rate**: 0.0%" in answer
    assert "Verified against 0 local records." in answer
    assert "⚠️ **Advisory**" in answer


def test_balance_advisory_below_threshold(make_txn, now):
    transactions = [make_txn(1000, "income", "Salary"), make_txn(900, "expense", "Housing")]
    answer = generate_response("net worth?", transactions, now=now)
    assert "Personal Savings Rate**: 10.0%" in answer
    assert "⚠️ **Advisory**: Your savings rate is below the 20% benchmark." in answer


def test_negative_balance_formatting(make_txn, now):
    answer = generate_response("status", [make_txn(12.5, "expense", "Food")], now=now)
    assert "**-$12.50**" in answer


def test_balance_beats_comparison(make_txn, now):
    query = "Compare food vs transport and show my balance"
    assert classify_intent(query, now=now) == "balance"
    answer = generate_response(query, [make_txn(10, category="Food")], now=now)
    assert "Executive Financial Summary" in answer
    assert "Category Comparison Report" not in answer


def test_comparison_report(make_txn, now):
    transactions = [
        make_txn(40, category="Food"),
        make_txn(20, category="Food"),
        make_txn(90, category="Transport"),
        make_txn(500, "income", "Salary"),
    ]

    answer = generate_response("Compare my Food vs Transport spending", transactions, now=now)

    assert answer.startswith(
        "### Category Comparison Report\n\n"
        "I've cross-referenced your spending across the requested categories:\n\n"
    )
    assert "- **FOOD**: $60.00\n" in answer
    assert "- **TRANSPORT**: $90.00\n" in answer
    assert "You are currently allocating the most capital to **TRANSPORT**." in answer
    assert answer.endswith(DISCLAIMER)


def test_comparison_tie_keeps_first_listed(make_txn, now):
    transactions = [make_txn(50, category="Transport"), make_txn(50, category="Food")]
    # "food" precedes "transport" in the category list regardless of query order.
    answer = generate_response("is transport more than food?", transactions, now=now)
    assert "most capital to **FOOD**" in answer


def test_comparison_all_zero_picks_first(now):
    answer = generate_response("health vs shopping vs housing", [], now=now)
    assert "most capital to **HOUSING**" in answer
    assert answer.index("HOUSING") < answer.index("SHOPPING") < answer.index("HEALTH")


def test_comparison_needs_two_categories(now):
    assert classify_intent("compare food", now=now) == "fallback"
    assert classify_intent("food and transport", now=now) == "fallback"


def test_spending_overall_all_time(make_txn, now):
    transactions = [
        make_txn(30, category="Food", days_ago=40),
        make_txn(20, category="Transport"),
        make_txn(1000, "income", "Salary"),
    ]

    answer = generate_response("How much have I spent?", transactions, now=now)

    assert "Targeting your **overall** expenses for **all-time**:" in answer
    assert "- **Identified Volume**: $50.00" in answer
    assert "- **Transaction Density**: 2 entries" in answer
    assert "within standard variance" in answer


def test_spending_with_category_and_month(make_txn, now):
    transactions = [
        make_txn(100, category="Utilities", days_ago=3),
        make_txn(70, category="Utilities", days_ago=40),
        make_txn(55, category="Food", days_ago=3),
    ]

    answer = generate_response("How much have I spent on Utilities this month?", transactions, now=now)

    assert "Targeting your **utilities** expenses for **this month**:" in answer
    assert "Identified Volume**: $100.00" in answer
    assert "Transaction Density**: 1 entries" in answer


def test_spending_today_and_yesterday(make_txn, now):
    transactions = [
        make_txn(10, category="Food"),
        make_txn(25, category="Food", days_ago=1),
    ]

    today = generate_response("What have I spent today?", transactions, now=now)
    yesterday = generate_response("expenses yesterday", transactions, now=now)

    assert "for **today**" in today and "$10.00" in today
    assert "for **yesterday**" in yesterday and "$25.00" in yesterday


def test_spending_yesterday_in_local_zone_after_dst_change(make_txn):
    now = datetime(2026, 3, 9, 12, 0, tzinfo=ZoneInfo("America/New_York"))
    transactions = [make_txn(25, category="Food", date="2026-03-08T16:00:00.000Z")]

    answer = generate_response("what have I spent yesterday", transactions, now=now)

    assert "As of 3/9/2026:" in generate_response("balance", transactions, now=now)
    assert "Identified Volume**: $25.00" in answer
    assert "Transaction Density**: 1 entries" in answer


def test_spending_high_volume_tip(make_txn, now):
    answer = generate_response("total cost", [make_txn(1000.01, category="Housing")], now=now)
    assert "statistically high for the period" in answer


def test_spending_high_volume_threshold_from_config(make_txn, now):
    cfg = Config(assistant=AssistantConfig(high_volume_threshold=5))
    answer = generate_response("total cost", [make_txn(6, category="Housing")], now=now, config=cfg)
    assert "statistically high for the period" in answer


def test_spending_other_category_example(make_txn, now):
    transactions = []
    for i in range(10):
        if i % 2 == 0:
            transactions.append(make_txn(5000, "income", "Salary", "Monthly Salary"))
        else:
            transactions.append(make_txn(100, "expense", "Other", "High Frequency Trading"))

    answer = generate_response("How much have I spent on Other things?", transactions, now=now)

    assert "Targeting your **other** expenses for **all-time**:" in answer
    assert "Identified Volume**: $500.00" in answer
    assert "Transaction Density**: 5 entries" in answer


def test_market_report_quotes_query(now):
    answer = generate_response("Current market trends for S&P 500", [], now=now)

    assert answer.startswith("### Market Intelligence Report")
    assert 'market data for: "Current market trends for S&P 500"' in answer
    assert "https://www.cboe.com/vix" in answer
    assert answer.endswith(DISCLAIMER)


@pytest.mark.parametrize(
    "query",
    ["Should I invest in crypto?", "mortgage interest rate", "Is INFLATION rising?", "stock prices"],
)
def test_market_keywords(query, now):
    assert classify_intent(query, now=now) == "market"


def test_savings_rate_never_routes_to_market(now):
    # Balance catches it first; the market guard holds even if it did not.
    assert classify_intent("savings rate vs market inflation", now=now) == "balance"


def test_market_guard_excludes_savings_rate():
    assert _is_market_query(build_query_context("savings rate and stock market", [])) is False
    assert _is_market_query(build_query_context("stock market", [])) is True


def test_spending_beats_market(now):
    assert classify_intent("cost of my stock purchases", now=now) == "spending"


def test_fallback_help_text(now):
    answer = generate_response("hello there", [], now=now)

    assert answer.startswith("### WealthWise Intelligence Console")
    assert '- "Compare my Food vs Transport spending"' in answer
    assert answer.endswith(DISCLAIMER)


def test_empty_query_falls_back(now):
    assert classify_intent("", now=now) == "fallback"
    assert "WealthWise Intelligence Console" in generate_response("", [], now=now)


def test_matching_is_case_insensitive(now):
    assert classify_intent("WHAT IS MY BALANCE", now=now) == "balance"


def test_detect_time_window_order():
    assert detect_time_window("today or yesterday") == "today"
    assert detect_time_window("Yesterday this month") == "yesterday"
    assert detect_time_window("monthly") == "this month"
    assert detect_time_window("ever") == "all-time"


def test_find_mentioned_categories_in_table_order():
    assert find_mentioned_categories("Transport vs FOOD") == ["food", "transport"]
    assert find_mentioned_categories("nothing here") == []
