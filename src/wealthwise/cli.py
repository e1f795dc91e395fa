"""Command-line interface for WealthWise.

This module is the presentation layer. It provides commands to:

- Show the dashboard report (financials, categories, insights, recent items).
- List, add and delete transactions, or clear a user's data.
- Ask the assistant a single question, or enter interactive chat mode.

The CLI intentionally stays thin and delegates to the core modules:

- wealthwise.transactions.TransactionStore
- wealthwise.validation.validate_transaction_input
- wealthwise.insights.generate_dashboard_report
- wealthwise.assistant.generate_response
- wealthwise.chatbot.start_chat_interface
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import chatbot
from .assistant import generate_response
from .config import Config, load_config
from .formatting import format_currency
from .i18n import get_translator
from .insights import generate_dashboard_report
from .models import TransactionCategory, TransactionType, to_iso
from .transactions import TransactionStore
from .validation import TransactionValidationError, validate_transaction_input


def _iso_timestamp(value: str) -> str:
    """argparse type: accept an ISO-8601 date/time and normalise it to UTC."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 timestamp: {value!r}") from exc
    return to_iso(parsed)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the WealthWise CLI."""
    parser = argparse.ArgumentParser(
        prog="wealthwise",
        description="WealthWise personal finance tracker",
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config.yaml",
        help="Path to config.yaml (default: config.yaml)",
    )
    parser.add_argument(
        "-u",
        "--user",
        help="User whose transactions to use. Defaults to config.ui.default_user.",
    )
    parser.add_argument(
        "-l",
        "--lang",
        help="Override UI language (e.g. 'en'). Defaults to config.ui.language.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("summary", help="Show the dashboard report (default).")
    sub.add_parser("list", help="List transactions, newest first.")

    add = sub.add_parser("add", help="Record a new transaction.")
    add.add_argument("-d", "--description", required=True)
    add.add_argument("-a", "--amount", required=True)
    add.add_argument(
        "-t",
        "--type",
        default=TransactionType.EXPENSE.value,
        help="income or expense (default: expense)",
    )
    add.add_argument(
        "-k",
        "--category",
        default=TransactionCategory.FOOD.value,
        help="One of: " + ", ".join(c.value for c in TransactionCategory) + " (default: Food)",
    )
    add.add_argument(
        "--date",
        type=_iso_timestamp,
        help="ISO-8601 timestamp (default: now)",
    )

    delete = sub.add_parser("delete", help="Delete a transaction by id.")
    delete.add_argument("transaction_id")

    sub.add_parser("clear", help="Remove all stored transactions for the user.")

    ask = sub.add_parser("ask", help="Ask the assistant a single question.")
    ask.add_argument("question", nargs="+")

    sub.add_parser("chat", help="Enter interactive chat mode.")

    return parser.parse_args(argv)


def _resolve_language(args: argparse.Namespace, cfg: Config) -> str:
    """Determine the effective UI language."""
    raw_lang = args.lang or cfg.ui.language or "en"
    return str(raw_lang).strip().lower() or "en"


def _resolve_user(args: argparse.Namespace, cfg: Config) -> str:
    return str(args.user or cfg.ui.default_user).strip() or cfg.ui.default_user


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _cmd_list(store: TransactionStore, user_id: str, cfg: Config, t: Any) -> int:
    transactions = store.get_all(user_id)
    if not transactions:
        print(t("cli.list_empty"))
        return 0
    for txn in transactions:
        print(
            t(
                "report.recent.item_line",
                date=txn.date[:10],
                sign="+" if txn.is_income else "-",
                amount=format_currency(txn.amount, cfg.ui.currency_symbol),
                description=txn.description,
                category=txn.category.value,
                id=txn.id,
            )
        )
    return 0


def _cmd_add(
    args: argparse.Namespace, store: TransactionStore, user_id: str, cfg: Config, t: Any
) -> int:
    try:
        fields = validate_transaction_input(
            description=args.description,
            amount=args.amount,
            type=args.type,
            category=args.category,
        )
    except TransactionValidationError as exc:
        print(t("cli.invalid_input"))
        for field_name, message in exc.errors.items():
            print(t("cli.field_error", field=field_name, message=message))
        return 2

    txn = store.add(user_id, date=args.date, **fields)
    print(
        t(
            "cli.added",
            id=txn.id,
            description=txn.description,
            sign="+" if txn.is_income else "-",
            amount=format_currency(txn.amount, cfg.ui.currency_symbol),
        )
    )
    return 0


def _cmd_delete(args: argparse.Namespace, store: TransactionStore, user_id: str, t: Any) -> int:
    known_ids = {txn.id for txn in store.get_all(user_id)}
    if args.transaction_id not in known_ids:
        print(t("cli.not_found", id=args.transaction_id))
        return 1
    store.delete(user_id, args.transaction_id)
    print(t("cli.deleted", id=args.transaction_id))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the WealthWise CLI."""
    args = parse_args(argv)
    _configure_logging(args.verbose)

    cfg = load_config(Path(args.config))
    language = _resolve_language(args, cfg)
    user_id = _resolve_user(args, cfg)
    t = get_translator(language)
    store = TransactionStore.from_config(cfg)

    command = args.command or "summary"

    if command == "summary":
        transactions = store.get_all(user_id)
        print(generate_dashboard_report(transactions, language=language, config=cfg))
        return 0

    if command == "list":
        return _cmd_list(store, user_id, cfg, t)

    if command == "add":
        return _cmd_add(args, store, user_id, cfg, t)

    if command == "delete":
        return _cmd_delete(args, store, user_id, t)

    if command == "clear":
        store.clear(user_id)
        print(t("cli.cleared", user=user_id))
        return 0

    if command == "ask":
        question = " ".join(args.question)
        print(generate_response(question, store.get_all(user_id), config=cfg, language=language))
        return 0

    context: Dict[str, Any] = {
        "store": store,
        "user_id": user_id,
        "config": cfg,
        "language": language,
    }
    chatbot.start_chat_interface(context)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual CLI entry
    raise SystemExit(main())
