"""Persistence layer for spendlog.

This module re-exports the public store API for easy importing.
"""

from spendlog.store.codec import BUDGET_KEY, EXPENSES_KEY, dump_budget, dump_expenses, load_budget, load_expenses
from spendlog.store.expenses import ExpenseStore
from spendlog.store.kv import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from spendlog.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Substrate
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqliteKeyValueStore",
    # Codec
    "BUDGET_KEY",
    "EXPENSES_KEY",
    "dump_budget",
    "dump_expenses",
    "load_budget",
    "load_expenses",
    # Store
    "ExpenseStore",
]
