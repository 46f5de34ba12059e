"""Client accounts, transaction types and the ledger engine.

Nothing in here reads files or prints: transactions come in already typed
and the final account balances are read back by the report code.
"""

__all__ = [
    "accounts",
    "ledger",
    "transactions",
]
