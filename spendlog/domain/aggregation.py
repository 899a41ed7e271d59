"""Pure functions for statistics, breakdowns, filters and budget status.

This module contains the functional core for reporting operations:
- No I/O operations (no storage, no console)
- No side effects
- Everything is recomputed from the current expense list on each call

All monetary amounts are exact decimals (Money type).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, localcontext
from enum import Enum

from spendlog.dates import in_month
from spendlog.domain.expenses import Expense, sort_by_date_desc
from spendlog.domain.models import CategoryName, Money

WARNING_THRESHOLD = Decimal(80)
EXCEEDED_THRESHOLD = Decimal(100)


class BudgetState(Enum):
    """Classification of the monthly total against the budget."""

    UNSET = "unset"
    UNDER_THRESHOLD = "under_threshold"
    WARNING = "warning"
    EXCEEDED = "exceeded"


@dataclass(frozen=True)
class BudgetStatus:
    """Immutable budget status for the current month.

    remaining is set for UNDER_THRESHOLD and WARNING, overage for EXCEEDED.
    """

    kind: BudgetState
    budget: Money | None = None
    monthly_total: Money = Money(Decimal(0))
    remaining: Money | None = None
    overage: Money | None = None
    percentage_used: Decimal | None = None


@dataclass(frozen=True)
class CategoryShare:
    """Immutable breakdown row for one category."""

    category: CategoryName
    amount: Money
    percentage: Decimal


@dataclass(frozen=True)
class Statistics:
    """Immutable dashboard statistics."""

    total_spent: Money
    transaction_count: int
    monthly_total: Money
    budget_status: BudgetStatus


def total_spent(expenses: Iterable[Expense]) -> Money:
    """Sum all expense amounts. An empty sequence sums to 0."""
    return Money(sum((e.amount for e in expenses), Decimal(0)))


def monthly_total(expenses: Iterable[Expense], year: int, month: int) -> Money:
    """Sum expense amounts dated within the given calendar year and month."""
    return total_spent(e for e in expenses if in_month(e.date, year, month))


def category_totals(expenses: Iterable[Expense]) -> dict[CategoryName, Money]:
    """Sum amounts per category.

    Returns:
        Dictionary ordered for display: descending by amount, with equal
        amounts kept in order of each category's first occurrence.
    """
    totals: dict[CategoryName, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, Decimal(0)) + expense.amount

    # sorted() is stable, so ties keep first-occurrence order
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return {category: Money(amount) for category, amount in ordered}


def category_percentage(category_amount: Decimal, total_amount: Decimal) -> Decimal:
    """Calculate a category's share of the total as a percentage.

    Returns:
        Percentage (0-100), or 0 when the total is 0.
    """
    if total_amount == 0:
        return Decimal(0)
    return category_amount / total_amount * 100


def category_breakdown(expenses: Sequence[Expense]) -> list[CategoryShare]:
    """Build the per-category breakdown, largest category first."""
    total = total_spent(expenses)
    return [
        CategoryShare(category=category, amount=amount, percentage=category_percentage(amount, total))
        for category, amount in category_totals(expenses).items()
    ]


def _exact_precision(*values: Decimal) -> int:
    """Digits needed to add, subtract or scale values by 100 without rounding."""
    highest = max(v.adjusted() for v in values)
    lowest = min(int(v.as_tuple().exponent) for v in values)
    return highest - lowest + 4


def budget_status(monthly: Decimal, budget: Decimal | None) -> BudgetStatus:
    """Classify the monthly total against the budget.

    Args:
        monthly: Total spent this month.
        budget: Monthly budget, or None if none is configured.

    Returns:
        BudgetStatus. Below 80% used is UNDER_THRESHOLD, 80% up to but not
        including 100% is WARNING, and 100% or more is EXCEEDED.
    """
    monthly_money = Money(Decimal(monthly))
    if budget is None or budget <= 0:
        return BudgetStatus(kind=BudgetState.UNSET, monthly_total=monthly_money)

    budget_money = Money(Decimal(budget))
    used = monthly_money / budget_money * 100

    # Thresholds compare scaled totals, never the rounded quotient
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _exact_precision(monthly_money, budget_money))
        scaled = monthly_money * 100
        exceeded = scaled >= budget_money * EXCEEDED_THRESHOLD
        warning = scaled >= budget_money * WARNING_THRESHOLD
        overage = monthly_money - budget_money
        remaining = budget_money - monthly_money

    if exceeded:
        return BudgetStatus(
            kind=BudgetState.EXCEEDED,
            budget=budget_money,
            monthly_total=monthly_money,
            overage=Money(overage),
            percentage_used=used,
        )

    kind = BudgetState.WARNING if warning else BudgetState.UNDER_THRESHOLD
    return BudgetStatus(
        kind=kind,
        budget=budget_money,
        monthly_total=monthly_money,
        remaining=Money(remaining),
        percentage_used=used,
    )


def budget_alert(status: BudgetStatus) -> str | None:
    """Return the alert message for a budget status, if one should be shown."""
    if status.kind is BudgetState.EXCEEDED:
        return "Budget Exceeded! You have spent more than your monthly budget."
    if status.kind is BudgetState.WARNING:
        return "Budget Warning! You have used 80% of your monthly budget."
    return None


def apply_filters(
    expenses: Sequence[Expense],
    category: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[Expense]:
    """Filter expenses by category and date range.

    Args:
        expenses: Expenses to filter.
        category: Exact category to keep. None keeps all.
        date_from: Inclusive lower bound on the expense date.
        date_to: Inclusive upper bound on the expense date.

    Returns:
        Matching expenses, newest first.
    """
    matched = [
        e
        for e in expenses
        if (not category or e.category == category)
        and (date_from is None or e.date >= date_from)
        and (date_to is None or e.date <= date_to)
    ]
    return sort_by_date_desc(matched)


def compute_statistics(expenses: Sequence[Expense], budget: Decimal | None, today: date) -> Statistics:
    """Compute dashboard statistics for the month containing today.

    Args:
        expenses: All expenses.
        budget: Monthly budget, or None.
        today: Current calendar date; selects the month.

    Returns:
        Statistics with totals and the budget status.
    """
    monthly = monthly_total(expenses, today.year, today.month)
    return Statistics(
        total_spent=total_spent(expenses),
        transaction_count=len(expenses),
        monthly_total=monthly,
        budget_status=budget_status(monthly, budget),
    )


def calculate_histogram_bar_length(
    amount: Decimal,
    max_amount: Decimal,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
