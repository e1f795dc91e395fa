"""Transaction store for WealthWise.

Each user's transactions are kept as a single JSON array under one key of the
key-value substrate (see :mod:`wealthwise.storage`). Every mutation reads the
whole list and writes it back wholesale; the list is ordered newest first.

The first read for a user with nothing stored seeds a small set of sample
transactions so the dashboard and assistant have something to show.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from .config import Config
from .models import Transaction, TransactionCategory, TransactionType, to_iso
from .storage import KeyValueStore, build_key_value_store

logger = logging.getLogger(__name__)


def build_seed_transactions(now: Optional[datetime] = None) -> List[Transaction]:
    """Sample data for a new user, dated relative to ``now``."""
    now = now or datetime.now(timezone.utc)
    seed = [
        ("Monthly Salary", 5000.0, TransactionType.INCOME, TransactionCategory.SALARY, now - timedelta(days=2)),
        ("Grocery Run", 156.40, TransactionType.EXPENSE, TransactionCategory.FOOD, now - timedelta(days=1)),
        ("Electric Bill", 120.50, TransactionType.EXPENSE, TransactionCategory.UTILITIES, now),
        ("Freelance Design", 850.0, TransactionType.INCOME, TransactionCategory.FREELANCE, now),
    ]
    return [
        Transaction.create(description, amount, txn_type, category, date=to_iso(when))
        for description, amount, txn_type, category, when in seed
    ]


def _decode(raw: bytes) -> List[Transaction]:
    payload = json.loads(raw.decode("utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
    return [Transaction.from_dict(item) for item in payload]


def _encode(transactions: List[Transaction]) -> bytes:
    return json.dumps([t.to_dict() for t in transactions]).encode("utf-8")


class TransactionStore:
    """CRUD access to per-user transaction lists.

    Parameters
    ----------
    kv:
        Key-value backend holding the serialised lists.
    key_prefix:
        Prefix combined with the user id to form the storage key.
    seed_sample_data:
        Whether the first read of an empty user seeds sample transactions.
    clock:
        Returns the current time; used for seed dates.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        key_prefix: str = "wealthwise_data_",
        seed_sample_data: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.kv = kv
        self.key_prefix = key_prefix
        self.seed_sample_data = seed_sample_data
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_config(cls, config: Config) -> "TransactionStore":
        return cls(
            build_key_value_store(config),
            key_prefix=config.storage.key_prefix,
            seed_sample_data=config.storage.seed_sample_data,
        )

    def _key(self, user_id: str) -> str:
        return f"{self.key_prefix}{user_id}"

    def _write(self, user_id: str, transactions: List[Transaction]) -> None:
        self.kv.set(self._key(user_id), _encode(transactions))

    def get_all(self, user_id: str) -> List[Transaction]:
        """Return the user's transactions, newest first.

        Malformed stored data is logged and read as an empty list.
        """
        raw = self.kv.get(self._key(user_id))
        if not raw:
            if not self.seed_sample_data:
                return []
            seeded = build_seed_transactions(self._clock())
            self._write(user_id, seeded)
            logger.info("WW STORE: seeded %d sample transactions for user %s", len(seeded), user_id)
            return seeded

        try:
            return _decode(raw)
        except (UnicodeDecodeError, ValueError, KeyError, TypeError) as exc:
            logger.warning("WW STORE: failed to parse transactions for user %s: %s", user_id, exc)
            return []

    def add(
        self,
        user_id: str,
        description: str,
        amount: float,
        type: TransactionType | str,
        category: TransactionCategory | str,
        date: Optional[str] = None,
    ) -> Transaction:
        """Create a transaction with a new id and put it at the front of the list."""
        transactions = self.get_all(user_id)
        if date is None:
            date = to_iso(self._clock())
        new_transaction = Transaction.create(description, amount, type, category, date=date)
        self._write(user_id, [new_transaction, *transactions])
        logger.debug("WW STORE: added transaction %s for user %s", new_transaction.id, user_id)
        return new_transaction

    def delete(self, user_id: str, transaction_id: str) -> None:
        """Remove the transaction with ``transaction_id``; unknown ids are a no-op."""
        transactions = self.get_all(user_id)
        remaining = [t for t in transactions if t.id != transaction_id]
        self._write(user_id, remaining)
        if len(remaining) == len(transactions):
            logger.debug("WW STORE: no transaction %s for user %s", transaction_id, user_id)

    def clear(self, user_id: str) -> None:
        """Drop the user's stored list; the next read seeds again."""
        self.kv.delete(self._key(user_id))
