"""Expense store: durable add/delete over the expense list and budget."""

import logging
from collections.abc import Callable
from datetime import date, datetime, timezone

from spendlog.domain.expenses import Expense, create_expense, generate_expense_id, validate_budget
from spendlog.domain.models import Money
from spendlog.store.codec import (
    BUDGET_KEY,
    EXPENSES_KEY,
    dump_budget,
    dump_expenses,
    load_budget,
    load_expenses,
)
from spendlog.store.kv import KeyValueStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


Listener = Callable[["ExpenseStore"], None]


class ExpenseStore:
    """Owns the persisted expense list and the monthly budget.

    Every mutation persists the full collection and then notifies
    subscribers, who re-read whatever they display.
    """

    def __init__(self, kv: KeyValueStore, clock: Callable[[], datetime] = utc_now) -> None:
        self.kv = kv
        self.clock = clock
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def today(self) -> date:
        """Current local calendar date according to the store clock."""
        return self.clock().astimezone().date()

    def list_all(self) -> list[Expense]:
        """Return every stored expense in insertion order.

        Missing or corrupt data reads as an empty list.
        """
        return load_expenses(self.kv.read(EXPENSES_KEY))

    def get(self, expense_id: str) -> Expense | None:
        """Return the expense with the given id, or None."""
        for expense in self.list_all():
            if expense.id == expense_id:
                return expense
        return None

    def add(self, amount: object, category: str, day: date, description: str = "") -> Expense:
        """Validate, append and persist a new expense.

        Args:
            amount: Amount spent; must be greater than zero.
            category: One of the fixed categories (case-insensitive).
            day: Date of the expense; must not be after today.
            description: Optional free text.

        Returns:
            The stored expense.

        Raises:
            InvalidAmount: If amount <= 0.
            FutureDate: If day is after today.
            UnknownCategory: If category is not recognised.
            StorageError: If persisting fails.
        """
        now = self.clock()
        expenses = self.list_all()
        expense_id = generate_expense_id(now, (e.id for e in expenses))
        expense = create_expense(amount, category, day, description, self.today(), now, expense_id)

        expenses.append(expense)
        self.kv.write(EXPENSES_KEY, dump_expenses(expenses))
        logger.debug("Added expense %s: %s %s on %s", expense.id, expense.amount, expense.category, expense.date)

        self._notify()
        return expense

    def delete(self, expense_id: str) -> bool:
        """Delete an expense by id.

        Returns:
            True if a record was removed, False if no record had that id.
        """
        expenses = self.list_all()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            logger.debug("Delete skipped, no expense with id %s", expense_id)
            return False

        self.kv.write(EXPENSES_KEY, dump_expenses(remaining))
        logger.debug("Deleted expense %s", expense_id)

        self._notify()
        return True

    def get_budget(self) -> Money | None:
        """Return the monthly budget, or None if unset."""
        return load_budget(self.kv.read(BUDGET_KEY))

    def set_budget(self, amount: object) -> Money:
        """Set the monthly budget, replacing any previous value.

        Raises:
            InvalidBudget: If amount is not a positive number.
        """
        budget = validate_budget(amount)
        self.kv.write(BUDGET_KEY, dump_budget(budget))
        logger.debug("Monthly budget set to %s", budget)

        self._notify()
        return budget

    def clear_budget(self) -> bool:
        """Remove the monthly budget.

        Returns:
            True if a budget was set before.
        """
        if self.get_budget() is None:
            return False
        self.kv.delete(BUDGET_KEY)
        logger.debug("Monthly budget cleared")

        self._notify()
        return True
