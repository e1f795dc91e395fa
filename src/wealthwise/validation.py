"""Input validation for new transactions.

Responsibilities:
- Check user-entered fields before they reach the transaction store
- Produce per-field error messages suitable for showing next to each input
"""

from __future__ import annotations

import math
from typing import Any, Dict

from .models import TransactionCategory, TransactionType

MIN_DESCRIPTION_LENGTH = 2
MIN_AMOUNT = 0.01


class TransactionValidationError(ValueError):
    """Raised when new-transaction input has one or more invalid fields."""

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        details = "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        super().__init__(f"Invalid transaction input ({details})")


def _coerce_amount(value: Any) -> float | None:
    """Parse an amount the way a form field would, or return None."""
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(amount) or math.isinf(amount):
        return None
    return amount


def collect_field_errors(
    description: Any,
    amount: Any,
    type: Any,
    category: Any,
) -> Dict[str, str]:
    """Return ``{field: message}`` for every invalid field (empty if all valid)."""
    errors: Dict[str, str] = {}

    if not isinstance(description, str) or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        errors["description"] = "Description is required"

    parsed_amount = _coerce_amount(amount)
    if parsed_amount is None:
        errors["amount"] = "Amount must be a number"
    elif parsed_amount < MIN_AMOUNT:
        errors["amount"] = "Amount must be positive"

    valid_types = {t.value for t in TransactionType}
    if type not in valid_types and not isinstance(type, TransactionType):
        errors["type"] = "Type must be one of: " + ", ".join(sorted(valid_types))

    valid_categories = [c.value for c in TransactionCategory]
    if not category:
        errors["category"] = "Category is required"
    elif category not in valid_categories and not isinstance(category, TransactionCategory):
        errors["category"] = "Category must be one of: " + ", ".join(valid_categories)

    return errors


def validate_transaction_input(
    description: Any,
    amount: Any,
    type: Any,
    category: Any,
) -> Dict[str, Any]:
    """Validate new-transaction input and return it normalised.

    Raises:
        TransactionValidationError: If any field is invalid.

    Returns:
        dict with ``description`` (stripped), ``amount`` (float), ``type`` and
        ``category`` (enum members), ready for ``TransactionStore.add``.
    """
    errors = collect_field_errors(description, amount, type, category)
    if errors:
        raise TransactionValidationError(errors)

    return {
        "description": description.strip(),
        "amount": _coerce_amount(amount),
        "type": TransactionType(type),
        "category": TransactionCategory(category),
    }
