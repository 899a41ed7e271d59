"""Tests for spendlog.domain.aggregation pure functions."""

from datetime import date, datetime, timezone
from decimal import Decimal

from spendlog.domain.aggregation import (
    BudgetState,
    apply_filters,
    budget_alert,
    budget_status,
    calculate_histogram_bar_length,
    category_breakdown,
    category_percentage,
    category_totals,
    compute_statistics,
    monthly_total,
    total_spent,
)
from spendlog.domain.expenses import Expense
from spendlog.domain.models import CategoryName, ExpenseId, Money


def make_expense(expense_id: str, amount: str, category: str, day: date) -> Expense:
    return Expense(
        id=ExpenseId(expense_id),
        amount=Money(Decimal(amount)),
        category=CategoryName(category),
        date=day,
        description="",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


EXPENSES = [
    make_expense("1", "120.50", "Food", date(2024, 1, 5)),
    make_expense("2", "40", "Transport", date(2024, 1, 20)),
    make_expense("3", "300", "Bills", date(2024, 2, 1)),
    make_expense("4", "79.50", "Food", date(2024, 1, 31)),
    make_expense("5", "15", "Food", date(2023, 12, 31)),
]


class TestTotalSpent:
    """Tests for total_spent."""

    def test_empty_is_zero(self) -> None:
        """Should return 0 for no expenses."""
        assert total_spent([]) == Decimal(0)

    def test_sums_all_amounts(self) -> None:
        """Should sum every amount exactly."""
        assert total_spent(EXPENSES) == Decimal("555.00")

    def test_order_does_not_matter(self) -> None:
        """Should give the same total for any ordering."""
        assert total_spent(list(reversed(EXPENSES))) == total_spent(EXPENSES)
        assert total_spent(sorted(EXPENSES, key=lambda e: e.category)) == total_spent(EXPENSES)


class TestMonthlyTotal:
    """Tests for monthly_total."""

    def test_only_counts_matching_month(self) -> None:
        """Should include both ends of the month and nothing outside it."""
        assert monthly_total(EXPENSES, 2024, 1) == Decimal("240.00")

    def test_same_month_in_other_year_excluded(self) -> None:
        """Should not count December 2023 towards December 2024."""
        assert monthly_total(EXPENSES, 2024, 12) == Decimal(0)

    def test_no_matches(self) -> None:
        """Should return 0 when nothing falls in the month."""
        assert monthly_total(EXPENSES, 2022, 6) == Decimal(0)


class TestCategoryTotals:
    """Tests for category_totals."""

    def test_groups_and_orders_descending(self) -> None:
        """Should sum by category, largest first."""
        totals = category_totals(EXPENSES)

        assert list(totals.items()) == [
            ("Bills", Decimal("300")),
            ("Food", Decimal("215.00")),
            ("Transport", Decimal("40")),
        ]

    def test_sums_to_total_spent(self) -> None:
        """Should add up to the overall total."""
        assert sum(category_totals(EXPENSES).values()) == total_spent(EXPENSES)

    def test_ties_keep_first_occurrence_order(self) -> None:
        """Should keep equal totals in order of first appearance."""
        expenses = [
            make_expense("1", "10", "Health", date(2024, 1, 1)),
            make_expense("2", "10", "Other", date(2024, 1, 2)),
            make_expense("3", "10", "Shopping", date(2024, 1, 3)),
        ]

        assert list(category_totals(expenses)) == ["Health", "Other", "Shopping"]
        assert list(category_totals(expenses)) == list(category_totals(expenses))

    def test_empty(self) -> None:
        """Should return an empty mapping."""
        assert category_totals([]) == {}


class TestCategoryPercentage:
    """Tests for category_percentage."""

    def test_share_of_total(self) -> None:
        """Should return the share as a percentage."""
        assert category_percentage(Decimal(25), Decimal(200)) == Decimal("12.5")

    def test_zero_total_is_zero(self) -> None:
        """Should return 0 instead of dividing by zero."""
        assert category_percentage(Decimal(0), Decimal(0)) == Decimal(0)


class TestCategoryBreakdown:
    """Tests for category_breakdown."""

    def test_rows_match_totals(self) -> None:
        """Should produce one row per category with its percentage."""
        rows = category_breakdown(EXPENSES)

        assert [row.category for row in rows] == ["Bills", "Food", "Transport"]
        assert rows[0].amount == Decimal("300")
        assert round(sum(row.percentage for row in rows), 10) == Decimal(100)

    def test_empty(self) -> None:
        """Should return no rows."""
        assert category_breakdown([]) == []


class TestBudgetStatus:
    """Tests for budget_status."""

    def test_unset(self) -> None:
        """Should be UNSET without a budget."""
        status = budget_status(Decimal(500), None)

        assert status.kind is BudgetState.UNSET
        assert status.remaining is None
        assert status.overage is None

    def test_under_threshold(self) -> None:
        """Should be UNDER_THRESHOLD below 80%."""
        status = budget_status(Decimal(799), Decimal(1000))

        assert status.kind is BudgetState.UNDER_THRESHOLD
        assert status.remaining == Decimal(201)

    def test_warning_at_exactly_80_percent(self) -> None:
        """Should be WARNING from exactly 80%."""
        status = budget_status(Decimal(800), Decimal(1000))

        assert status.kind is BudgetState.WARNING
        assert status.remaining == Decimal(200)

    def test_warning(self) -> None:
        """Should be WARNING between 80% and 100%."""
        status = budget_status(Decimal(850), Decimal(1000))

        assert status.kind is BudgetState.WARNING
        assert status.remaining == Decimal(150)
        assert status.percentage_used == Decimal(85)

    def test_exceeded_at_exactly_100_percent(self) -> None:
        """Should count exactly 100% as EXCEEDED with no overage."""
        status = budget_status(Decimal(1000), Decimal(1000))

        assert status.kind is BudgetState.EXCEEDED
        assert status.overage == Decimal(0)
        assert status.remaining is None

    def test_exceeded(self) -> None:
        """Should report the overage above 100%."""
        status = budget_status(Decimal(1200), Decimal(1000))

        assert status.kind is BudgetState.EXCEEDED
        assert status.overage == Decimal(200)

    def test_nothing_spent(self) -> None:
        """Should leave the whole budget remaining."""
        status = budget_status(Decimal(0), Decimal(1000))

        assert status.kind is BudgetState.UNDER_THRESHOLD
        assert status.remaining == Decimal(1000)

    def test_just_below_80_percent_is_not_rounded_up(self) -> None:
        """Should stay UNDER_THRESHOLD when the used share only rounds to 80%."""
        monthly = Decimal("799." + "9" * 30)

        status = budget_status(monthly, Decimal(1000))

        assert status.kind is BudgetState.UNDER_THRESHOLD
        assert status.remaining == Decimal("200." + "0" * 29 + "1")

    def test_just_below_100_percent_is_not_rounded_up(self) -> None:
        """Should stay WARNING when the used share only rounds to 100%."""
        monthly = Decimal("999." + "9" * 30)

        status = budget_status(monthly, Decimal(1000))

        assert status.kind is BudgetState.WARNING
        assert status.remaining == Decimal("0." + "0" * 29 + "1")


class TestBudgetAlert:
    """Tests for budget_alert."""

    def test_alert_messages(self) -> None:
        """Should alert only for WARNING and EXCEEDED."""
        exceeded = budget_alert(budget_status(Decimal(1000), Decimal(1000)))
        warning = budget_alert(budget_status(Decimal(900), Decimal(1000)))

        assert exceeded is not None and "Budget Exceeded" in exceeded
        assert warning is not None and "Budget Warning" in warning
        assert budget_alert(budget_status(Decimal(100), Decimal(1000))) is None
        assert budget_alert(budget_status(Decimal(100), None)) is None


class TestApplyFilters:
    """Tests for apply_filters."""

    def test_category_and_date_range(self) -> None:
        """Should keep only Food expenses within January, inclusive."""
        result = apply_filters(EXPENSES, "Food", date(2024, 1, 1), date(2024, 1, 31))

        assert [e.id for e in result] == ["4", "1"]

    def test_bounds_are_inclusive(self) -> None:
        """Should include expenses on either bound."""
        result = apply_filters(EXPENSES, date_from=date(2024, 1, 5), date_to=date(2024, 1, 5))

        assert [e.id for e in result] == ["1"]

    def test_each_bound_is_optional(self) -> None:
        """Should apply a lone lower or upper bound."""
        assert [e.id for e in apply_filters(EXPENSES, date_from=date(2024, 1, 31))] == ["3", "4"]
        assert [e.id for e in apply_filters(EXPENSES, date_to=date(2023, 12, 31))] == ["5"]

    def test_no_filters_keeps_everything(self) -> None:
        """Should keep all expenses in a deterministic order."""
        first = apply_filters(EXPENSES)
        second = apply_filters(list(reversed(EXPENSES)))

        assert {e.id for e in first} == {e.id for e in EXPENSES}
        assert [e.id for e in first] == [e.id for e in second]
        assert [e.id for e in first] == ["3", "4", "2", "1", "5"]

    def test_no_match(self) -> None:
        """Should return an empty list when nothing matches."""
        assert apply_filters(EXPENSES, "Health") == []


class TestComputeStatistics:
    """Tests for compute_statistics."""

    def test_statistics_for_current_month(self) -> None:
        """Should combine totals, count and budget status."""
        stats = compute_statistics(EXPENSES, Decimal(300), date(2024, 1, 31))

        assert stats.total_spent == Decimal("555.00")
        assert stats.transaction_count == 5
        assert stats.monthly_total == Decimal("240.00")
        assert stats.budget_status.kind is BudgetState.WARNING
        assert stats.budget_status.remaining == Decimal("60.00")

    def test_empty(self) -> None:
        """Should be all zeros without expenses."""
        stats = compute_statistics([], None, date(2024, 1, 31))

        assert stats.total_spent == Decimal(0)
        assert stats.transaction_count == 0
        assert stats.budget_status.kind is BudgetState.UNSET


class TestCalculateHistogramBarLength:
    """Tests for calculate_histogram_bar_length."""

    def test_scales_to_width(self) -> None:
        """Should scale relative to the largest amount."""
        assert calculate_histogram_bar_length(Decimal(50), Decimal(100), 30) == 15
        assert calculate_histogram_bar_length(Decimal(100), Decimal(100), 30) == 30

    def test_zero_max(self) -> None:
        """Should return 0 when the maximum is not positive."""
        assert calculate_histogram_bar_length(Decimal(50), Decimal(0), 30) == 0
