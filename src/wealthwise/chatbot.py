"""Interactive chat interface for WealthWise.

A small REPL on top of the assistant. It supports:

- Slash commands ("/summary", "/insights", "/help", "/quit").
- Free-form questions answered by :func:`wealthwise.assistant.generate_response`.

Transactions are re-read from the store for every question so that changes
made elsewhere show up in the next answer.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from . import assistant
from .config import Config
from .i18n import get_translator
from .insights import generate_dashboard_report, generate_insights
from .transactions import TransactionStore

logger = logging.getLogger(__name__)


def answer_line(line: str, context: Dict[str, Any]) -> Optional[str]:
    """Handle one line of user input.

    Returns the text to show, or None when the user asked to leave.
    """
    store: TransactionStore = context["store"]
    user_id: str = context["user_id"]
    cfg: Config = context.get("config") or Config()
    language = str(context.get("language") or cfg.ui.language)
    t = get_translator(language)

    lower = line.strip().lower()

    if lower in {"/quit", "/exit"}:
        return None
    if lower == "/help":
        return t("chat.help")

    transactions = store.get_all(user_id)

    if lower == "/summary":
        return generate_dashboard_report(transactions, language=language, config=cfg)
    if lower == "/insights":
        insights = generate_insights(transactions, config=cfg, language=language)
        if not insights:
            return t("report.insights.none")
        return "\n".join(f"- {item}" for item in insights)

    return assistant.generate_response(line, transactions, config=cfg, language=language)


def start_chat_interface(
    context: Dict[str, Any],
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> None:
    """Start the interactive chat loop.

    Parameters
    ----------
    context:
        Shared objects from the CLI:

        - ``store``: the TransactionStore.
        - ``user_id``: whose transactions to use.
        - ``config``: loaded Config object.
        - ``language``: effective UI language.
    """
    cfg: Config = context.get("config") or Config()
    language = str(context.get("language") or cfg.ui.language)
    t = get_translator(language)

    output_fn(t("chat.banner", user=context.get("user_id", "")))
    output_fn("")
    output_fn(t("chat.help"))
    output_fn("")

    while True:
        try:
            user_input = input_fn(t("chat.prompt"))
        except (EOFError, KeyboardInterrupt):
            output_fn("")
            output_fn(t("chat.exiting"))
            break

        if not user_input.strip():
            continue

        answer = answer_line(user_input, context)
        if answer is None:
            output_fn(t("chat.goodbye"))
            break

        logger.debug("WW CHAT: answered %d chars", len(answer))
        output_fn("")
        output_fn(answer)
        output_fn("")
