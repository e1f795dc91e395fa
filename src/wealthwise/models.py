"""Domain types for WealthWise transactions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionCategory(str, Enum):
    """Closed set of labels a transaction can carry."""

    FOOD = "Food"
    HOUSING = "Housing"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    SALARY = "Salary"
    FREELANCE = "Freelance"
    SHOPPING = "Shopping"
    UTILITIES = "Utilities"
    HEALTH = "Health"
    OTHER = "Other"


def new_transaction_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC timestamp (``...Z``)."""
    return to_iso(datetime.now(timezone.utc))


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Transaction:
    """A single logged income or expense.

    Attributes:
        id: Unique identifier (UUID4 string).
        description: Free-text label entered by the user.
        amount: Positive amount; the sign comes from ``type``.
        type: Income or expense.
        category: One of :class:`TransactionCategory`.
        date: ISO-8601 timestamp string.
    """

    id: str
    description: str
    amount: float
    type: TransactionType
    category: TransactionCategory
    date: str

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @classmethod
    def create(
        cls,
        description: str,
        amount: float,
        type: TransactionType | str,
        category: TransactionCategory | str,
        date: Optional[str] = None,
    ) -> "Transaction":
        """Build a new transaction with a fresh id (and ``now`` if no date)."""
        return cls(
            id=new_transaction_id(),
            description=description,
            amount=float(amount),
            type=TransactionType(type),
            category=TransactionCategory(category),
            date=date or utc_now_iso(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "type": self.type.value,
            "category": self.category.value,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transaction":
        """Rebuild a transaction from its JSON form.

        Raises:
            KeyError: If a field is missing.
            ValueError: If ``type``/``category`` are outside their enumerations
                or ``amount`` is not numeric.
        """
        return cls(
            id=str(data["id"]),
            description=str(data["description"]),
            amount=float(data["amount"]),
            type=TransactionType(data["type"]),
            category=TransactionCategory(data["category"]),
            date=str(data["date"]),
        )


@dataclass(frozen=True)
class Financials:
    """Aggregated totals derived from a transaction list."""

    income: float
    expense: float
    balance: float

    @property
    def savings_rate_pct(self) -> float:
        """Balance as a percentage of income, 0 when there is no income."""
        if self.income > 0:
            return (self.balance / self.income) * 100.0
        return 0.0
