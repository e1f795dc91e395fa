from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from wealthwise.config import Config, StorageConfig, load_config
from wealthwise.models import Transaction, TransactionCategory, TransactionType, to_iso
from wealthwise.storage import InMemoryKeyValueStore
from wealthwise.transactions import TransactionStore


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Path to the project root (where config.yaml lives)."""
    return Path(__file__).resolve().parent.parent


@pytest.fixture(scope="session")
def config_obj(project_root: Path) -> Config:
    """Loaded Config object from config.yaml."""
    return load_config(project_root / "config.yaml")


@pytest.fixture
def memory_config(tmp_path) -> Config:
    """Config using the in-memory backend, isolated per test."""
    return Config(storage=StorageConfig(backend="memory", path=tmp_path / "kv"))


@pytest.fixture
def now() -> datetime:
    """Fixed reference time: mid-month, midday UTC."""
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_txn(now):
    """Factory for transactions dated relative to ``now``."""

    def _make(
        amount,
        type="expense",
        category="Other",
        description="Item",
        days_ago=0,
        date=None,
    ) -> Transaction:
        when = date or to_iso(now - timedelta(days=days_ago))
        return Transaction.create(description, amount, TransactionType(type), TransactionCategory(category), date=when)

    return _make


@pytest.fixture
def sample_transactions(make_txn):
    return [
        make_txn(5000, "income", "Salary", "Monthly Salary", days_ago=2),
        make_txn(156.40, "expense", "Food", "Grocery Run", days_ago=1),
        make_txn(120.50, "expense", "Utilities", "Electric Bill"),
        make_txn(850, "income", "Freelance", "Freelance Design"),
    ]


@pytest.fixture
def store(now) -> TransactionStore:
    return TransactionStore(InMemoryKeyValueStore(), clock=lambda: now)
