"""Pure functions for expense records.

This module contains the functional core for expense operations:
- No I/O operations (no storage, no console)
- No clock reads; callers pass today/now explicitly
- Validation raises before anything is built

All monetary amounts are exact decimals (Money type).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from spendlog.dates import is_after
from spendlog.domain.models import Category, CategoryName, ExpenseId, Money
from spendlog.errors import FutureDate, InvalidAmount, InvalidBudget


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    id: ExpenseId
    amount: Money
    category: CategoryName
    date: date
    description: str
    created_at: datetime


def to_decimal(value: object) -> Decimal | None:
    """Coerce a number or numeric string to Decimal.

    Returns:
        The finite Decimal value, or None if the value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    return result


def validate_amount(amount: object) -> Money:
    """Validate an expense amount.

    Raises:
        InvalidAmount: If the amount is not a number greater than zero.
    """
    value = to_decimal(amount)
    if value is None or value <= 0:
        raise InvalidAmount(amount)
    return Money(value)


def validate_expense_date(day: date, today: date) -> date:
    """Validate an expense date against today.

    Raises:
        FutureDate: If day is strictly after today.
    """
    if is_after(day, today):
        raise FutureDate(day)
    return day


def validate_budget(amount: object) -> Money:
    """Validate a monthly budget value.

    Raises:
        InvalidBudget: If the amount is not a number greater than zero.
    """
    value = to_decimal(amount)
    if value is None or value <= 0:
        raise InvalidBudget(amount)
    return Money(value)


def generate_expense_id(now: datetime, existing: Iterable[str] = ()) -> ExpenseId:
    """Generate an expense id from the creation time.

    The id is the creation time in milliseconds since the epoch. If two
    expenses are created within the same millisecond, the next free value
    is used instead.

    Args:
        now: Creation time.
        existing: Ids already in use.

    Returns:
        An id not present in existing.
    """
    taken = set(existing)
    candidate = int(now.timestamp() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return ExpenseId(str(candidate))


def create_expense(
    amount: object,
    category: str,
    day: date,
    description: str,
    today: date,
    now: datetime,
    expense_id: ExpenseId,
) -> Expense:
    """Validate input and build a new expense.

    Args:
        amount: Amount spent (number or numeric string).
        category: Category name, case-insensitive.
        day: Date the money was spent.
        description: Free text, may be empty.
        today: Current calendar date.
        now: Creation timestamp.
        expense_id: Id for the new record.

    Returns:
        The new Expense.

    Raises:
        InvalidAmount: If amount <= 0.
        FutureDate: If day is after today.
        UnknownCategory: If category is not one of the fixed categories.
    """
    money = validate_amount(amount)
    validate_expense_date(day, today)
    category_name = CategoryName(Category.parse(category).value)

    return Expense(
        id=expense_id,
        amount=money,
        category=category_name,
        date=day,
        description=description.strip(),
        created_at=now,
    )


def sort_by_date_desc(expenses: Sequence[Expense]) -> list[Expense]:
    """Sort expenses newest first.

    Ties on date are broken by creation time and then id, both descending,
    so the order is the same for every call with the same input. The input
    sequence is left untouched.
    """
    return sorted(expenses, key=lambda e: (e.date, e.created_at, e.id), reverse=True)
