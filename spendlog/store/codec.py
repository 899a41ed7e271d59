"""Serialization of expenses and the budget to persisted text.

Layout:
- expenses: JSON array of {id, amount, category, date, description, timestamp}.
  amount is a JSON number when a float holds it exactly, otherwise the
  exact decimal text (e.g. "0.12345678901234567891").
- monthlyBudget: decimal number as text

Loading never raises. Missing or unreadable payloads load as empty, and
individual malformed records are skipped.
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from spendlog.domain.expenses import Expense, to_decimal
from spendlog.domain.models import Category, CategoryName, ExpenseId, Money
from spendlog.errors import ValidationError

logger = logging.getLogger(__name__)

EXPENSES_KEY = "expenses"
BUDGET_KEY = "monthlyBudget"


def _format_timestamp(value: datetime) -> str:
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_timestamp(text: str) -> datetime:
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    """Convert an expense to its persisted field layout."""
    return {
        "id": expense.id,
        "amount": expense.amount,
        "category": expense.category,
        "date": expense.date.isoformat(),
        "description": expense.description,
        "timestamp": _format_timestamp(expense.created_at),
    }


def expense_from_dict(raw: Any) -> Expense:
    """Build an expense from a persisted record.

    Raises:
        ValueError: If a field is missing or malformed.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"expected object, got {type(raw).__name__}")

    try:
        expense_id = raw["id"]
        amount = to_decimal(raw["amount"])
        category = Category.parse(str(raw["category"]))
        day = date.fromisoformat(str(raw["date"]))
    except KeyError as e:
        raise ValueError(f"missing field {e}") from e
    except (ValidationError, TypeError) as e:
        raise ValueError(str(e)) from e

    if expense_id is None or str(expense_id) == "":
        raise ValueError("id must not be empty")
    if amount is None or amount <= 0:
        raise ValueError(f"amount must be positive, got {raw['amount']!r}")

    timestamp = raw.get("timestamp")
    if timestamp:
        created_at = _parse_timestamp(str(timestamp))
    else:
        created_at = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)

    return Expense(
        id=ExpenseId(str(expense_id)),
        amount=Money(amount),
        category=CategoryName(category.value),
        date=day,
        description=str(raw.get("description") or ""),
        created_at=created_at,
    )


def _encode_decimal(value: Any) -> Any:
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        # Written as a number only when a float carries the value exactly
        as_float = float(value)
        if Decimal(repr(as_float)) == value:
            return as_float
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_expenses(expenses: list[Expense]) -> str:
    """Serialize expenses to JSON text."""
    return json.dumps([expense_to_dict(e) for e in expenses], default=_encode_decimal, ensure_ascii=False)


def load_expenses(text: str | None) -> list[Expense]:
    """Deserialize expenses from JSON text.

    Args:
        text: Persisted JSON, or None if nothing was stored.

    Returns:
        Valid expenses in stored order. Malformed records and repeated ids
        are skipped with a warning.
    """
    if not text:
        return []

    try:
        payload = json.loads(text, parse_float=Decimal)
    except ValueError as e:
        logger.warning("Ignoring unreadable expense data: %s", e)
        return []

    if not isinstance(payload, list):
        logger.warning("Ignoring expense data: expected a list, got %s", type(payload).__name__)
        return []

    expenses: list[Expense] = []
    seen: set[str] = set()
    for index, raw in enumerate(payload):
        try:
            expense = expense_from_dict(raw)
        except ValueError as e:
            logger.warning("Skipping malformed expense at index %d: %s", index, e)
            continue
        if expense.id in seen:
            logger.warning("Skipping duplicate expense id %s", expense.id)
            continue
        seen.add(expense.id)
        expenses.append(expense)

    return expenses


def dump_budget(amount: Decimal) -> str:
    """Serialize a budget value to text."""
    return str(amount)


def load_budget(text: str | None) -> Money | None:
    """Deserialize a budget value.

    Returns:
        The budget, or None if missing, non-numeric or not positive.
    """
    if text is None:
        return None

    value = to_decimal(text)
    if value is None or value <= 0:
        if text.strip():
            logger.warning("Ignoring invalid budget value: %r", text)
        return None
    return Money(value)
