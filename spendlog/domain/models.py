"""Domain type definitions for spendlog.

These NewTypes provide semantic clarity and help with type checking:
- Money: Exact decimal amount in major currency units
- CategoryName: Name of an expense category
- ExpenseId: Opaque expense identifier
"""

from decimal import Decimal
from enum import Enum
from typing import NewType

from spendlog.errors import UnknownCategory

# Decimal keeps sums exact; floats would drift on repeated additions
Money = NewType("Money", Decimal)

CategoryName = NewType("CategoryName", str)

ExpenseId = NewType("ExpenseId", str)


class Category(str, Enum):
    """The fixed set of expense categories."""

    FOOD = "Food"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    OTHER = "Other"

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, name: str) -> "Category":
        """Look up a category by name, ignoring case.

        Raises:
            UnknownCategory: If the name is not one of the fixed categories.
        """
        wanted = name.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise UnknownCategory(name, cls.names())
