"""Domain models and pure functions for spendlog.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations and no clock reads
- Business logic separated from infrastructure
"""

from spendlog.domain.models import Category, CategoryName, ExpenseId, Money

__all__ = ["Category", "CategoryName", "ExpenseId", "Money"]
