"""Exceptions raised by spendlog.

Validation failures are raised before any mutation so a rejected command
never touches persisted state.
"""


class SpendlogError(Exception):
    """Base class for all spendlog errors."""


class ValidationError(SpendlogError, ValueError):
    """Raised when user input does not meet validation requirements."""


class InvalidAmount(ValidationError):
    """Raised when an expense amount is not a positive number."""

    def __init__(self, amount: object) -> None:
        self.amount = amount
        super().__init__("Amount must be greater than zero!")


class FutureDate(ValidationError):
    """Raised when an expense date is after today."""

    def __init__(self, date: object) -> None:
        self.date = date
        super().__init__("Date cannot be in the future!")


class InvalidBudget(ValidationError):
    """Raised when a budget is not a positive number."""

    def __init__(self, amount: object) -> None:
        self.amount = amount
        super().__init__("Please enter a valid budget amount!")


class UnknownCategory(ValidationError):
    """Raised when a category is outside the fixed category set."""

    def __init__(self, name: object, choices: list[str]) -> None:
        self.name = name
        self.choices = choices
        super().__init__(f"Unknown category '{name}'. Choose one of: {', '.join(choices)}")


class InvalidDate(ValidationError):
    """Raised when date text cannot be parsed."""

    def __init__(self, text: object) -> None:
        self.text = text
        super().__init__(f"Invalid date format: {text}")


class StorageError(SpendlogError):
    """Raised when the persisted substrate rejects a write."""
