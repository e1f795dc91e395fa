"""Configuration loading for WealthWise.

This module is responsible for:
- Loading YAML configuration from config.yaml (or a custom path)
- Applying defaults for every optional section
- Exposing a Config object used by other modules

Sections:
- storage: where and how transactions are persisted
- ui: language, currency symbol, date display
- insights: thresholds for the advisory rules
- assistant: thresholds used by the chat assistant templates
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


# ---------------------------------------------------------------------------
# Dataclasses representing each config section
# ---------------------------------------------------------------------------


@dataclass
class StorageConfig:
    """Configuration for the key-value persistence substrate."""

    # Backend identifier: "file" (one file per key) or "memory".
    backend: str = "file"

    # Directory used by the file backend; namespace for the memory backend.
    path: Path = Path("data/store")

    # Prefix for per-user transaction keys.
    key_prefix: str = "wealthwise_data_"

    # Seed sample transactions the first time a user's list is read.
    seed_sample_data: bool = True


@dataclass
class UiConfig:
    """User-facing output configuration."""

    # ISO language code for user-facing output.
    language: str = "en"
    currency_symbol: str = "$"
    # str.format template over the date `d`; strftime codes via {d:%Y-%m-%d}.
    date_format: str = "{d.month}/{d.day}/{d.year}"
    default_user: str = "demo"
    recent_transactions: int = 5


@dataclass
class InsightsConfig:
    """Thresholds for the advisory insight rules."""

    # Expenses above this share of income count as "low savings".
    low_savings_ratio: float = 0.8
    food_spending_limit: float = 500.0
    subscription_spending_limit: float = 200.0


@dataclass
class AssistantConfig:
    """Thresholds used by the assistant's response templates."""

    savings_advisory_rate_pct: float = 15.0
    high_volume_threshold: float = 1000.0


@dataclass
class Config:
    """Top-level configuration object passed around the application."""

    # Raw config dictionary (useful for debugging / advanced access).
    raw: Dict[str, Any] = field(default_factory=dict)

    storage: StorageConfig = field(default_factory=StorageConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    insights: InsightsConfig = field(default_factory=InsightsConfig)
    assistant: AssistantConfig = field(default_factory=AssistantConfig)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML file into a dictionary.

    Returns an empty dict if the file is empty.
    """
    with path.open("r", encoding="utf-8") as f:
        content = yaml.safe_load(f) or {}
    if not isinstance(content, dict):
        raise ValueError(f"Configuration file {path} must contain a YAML mapping at the top level.")
    return content


def load_config(path: str | Path = "config.yaml") -> Config:
    """Load configuration from a YAML file and return a Config object.

    This function is the single entry point for configuration loading.
    Other modules should import and use it instead of talking to YAML directly.
    """
    config_path = Path(path)
    raw_cfg = _load_yaml(config_path)

    # --- Storage section ---
    storage_raw = raw_cfg.get("storage", {}) or {}
    storage_defaults = StorageConfig()
    storage_cfg = StorageConfig(
        backend=str(storage_raw.get("backend", storage_defaults.backend)).strip().lower(),
        path=Path(storage_raw.get("path", storage_defaults.path)),
        key_prefix=str(storage_raw.get("key_prefix", storage_defaults.key_prefix)),
        seed_sample_data=bool(
            storage_raw.get("seed_sample_data", storage_defaults.seed_sample_data)
        ),
    )

    # --- UI section ---
    ui_raw = raw_cfg.get("ui", {}) or {}
    ui_defaults = UiConfig()
    ui_language_raw = ui_raw.get("language", ui_defaults.language)
    # Normalize to lower-case string, defaulting to "en".
    ui_language = (
        str(ui_language_raw).strip().lower() if ui_language_raw else ui_defaults.language
    )
    ui_cfg = UiConfig(
        language=ui_language,
        currency_symbol=str(ui_raw.get("currency_symbol", ui_defaults.currency_symbol)),
        date_format=str(ui_raw.get("date_format", ui_defaults.date_format)),
        default_user=str(ui_raw.get("default_user", ui_defaults.default_user)),
        recent_transactions=int(
            ui_raw.get("recent_transactions", ui_defaults.recent_transactions)
        ),
    )

    # --- Insights section ---
    insights_raw = raw_cfg.get("insights", {}) or {}
    insights_defaults = InsightsConfig()
    insights_cfg = InsightsConfig(
        low_savings_ratio=float(
            insights_raw.get("low_savings_ratio", insights_defaults.low_savings_ratio)
        ),
        food_spending_limit=float(
            insights_raw.get("food_spending_limit", insights_defaults.food_spending_limit)
        ),
        subscription_spending_limit=float(
            insights_raw.get(
                "subscription_spending_limit",
                insights_defaults.subscription_spending_limit,
            )
        ),
    )

    # --- Assistant section ---
    assistant_raw = raw_cfg.get("assistant", {}) or {}
    assistant_defaults = AssistantConfig()
    assistant_cfg = AssistantConfig(
        savings_advisory_rate_pct=float(
            assistant_raw.get(
                "savings_advisory_rate_pct",
                assistant_defaults.savings_advisory_rate_pct,
            )
        ),
        high_volume_threshold=float(
            assistant_raw.get(
                "high_volume_threshold", assistant_defaults.high_volume_threshold
            )
        ),
    )

    return Config(
        raw=raw_cfg,
        storage=storage_cfg,
        ui=ui_cfg,
        insights=insights_cfg,
        assistant=assistant_cfg,
    )
