from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterable

from .accounts import Account
from .transactions import (
    Chargeback,
    ClientId,
    Deposit,
    Dispute,
    FundsMovement,
    Resolve,
    Transaction,
    TxId,
    Withdrawal,
    transaction_type,
)

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    pass


class DuplicateTransactionError(LedgerError):
    def __init__(self, *, tx_id: TxId, client_id: ClientId) -> None:
        self.tx_id = tx_id
        self.client_id = client_id
        super().__init__(f"Transaction tx_id={tx_id} already exists (client={client_id})")


class LedgerEngine:
    """Apply deposits, withdrawals and the dispute lifecycle to client accounts.

    Transactions must be applied in arrival order by a single caller. Rejected
    transactions (locked account, insufficient funds, unknown references) have
    no effect and are not reported. Reusing the id of a recorded deposit or
    withdrawal raises :class:`DuplicateTransactionError`, after which the
    engine state should not be reported as complete.
    """

    def __init__(self) -> None:
        self._accounts: dict[ClientId, Account] = {}
        self._history: dict[TxId, FundsMovement] = {}
        self._disputed: set[TxId] = set()

    @property
    def accounts(self) -> Mapping[ClientId, Account]:
        return MappingProxyType(self._accounts)

    @property
    def disputed(self) -> frozenset[TxId]:
        return frozenset(self._disputed)

    def account(self, client_id: ClientId) -> Account | None:
        return self._accounts.get(client_id)

    def transaction(self, tx_id: TxId) -> FundsMovement | None:
        return self._history.get(tx_id)

    def is_disputed(self, tx_id: TxId) -> bool:
        return tx_id in self._disputed

    def process(self, transactions: Iterable[Transaction]) -> int:
        """Caller must provide transactions in arrival order."""
        count = 0
        for tx in transactions:
            self.apply(tx)
            count += 1
        return count

    def apply(self, tx: Transaction) -> None:
        if not self._admit(tx):
            return

        match tx:
            case Deposit():
                self._record(tx)
                self._get_or_create_account(tx.client_id).deposit(tx.amount)
            case Withdrawal():
                self._record(tx)
                self._accounts[tx.client_id].withdraw(tx.amount)
            case Dispute():
                self._dispute(tx)
            case Resolve():
                self._resolve(tx)
            case Chargeback():
                self._chargeback(tx)

    def _admit(self, tx: Transaction) -> bool:
        account = self._accounts.get(tx.client_id)
        if account is not None and account.locked:
            logger.debug("Dropping %s tx=%s: client %s is locked", transaction_type(tx), tx.tx_id, tx.client_id)
            return False

        if isinstance(tx, Withdrawal):
            if account is None:
                # The client is still listed in the report, with empty balances.
                self._get_or_create_account(tx.client_id)
                logger.debug("Dropping withdrawal tx=%s: client %s has no funds", tx.tx_id, tx.client_id)
                return False
            if account.available < tx.amount:
                logger.debug(
                    "Dropping withdrawal tx=%s: client %s available=%s requested=%s",
                    tx.tx_id,
                    tx.client_id,
                    account.available,
                    tx.amount,
                )
                return False

        return True

    def _record(self, tx: FundsMovement) -> None:
        # Only deposits and withdrawals own a tx_id; reference-only transactions just point at one.
        if tx.tx_id in self._history:
            raise DuplicateTransactionError(tx_id=tx.tx_id, client_id=tx.client_id)
        self._history[tx.tx_id] = tx

    def _get_or_create_account(self, client_id: ClientId) -> Account:
        account = self._accounts.get(client_id)
        if account is None:
            account = Account(client_id=client_id)
            self._accounts[client_id] = account
        return account

    def _referenced(self, tx: Dispute | Resolve | Chargeback) -> tuple[Account, FundsMovement] | None:
        original = self._history.get(tx.tx_id)
        if original is None:
            logger.debug("Ignoring %s: unknown tx=%s", transaction_type(tx), tx.tx_id)
            return None
        account = self._accounts.get(tx.client_id)
        if account is None:
            logger.debug("Ignoring %s tx=%s: unknown client %s", transaction_type(tx), tx.tx_id, tx.client_id)
            return None
        return account, original

    def _dispute(self, tx: Dispute) -> None:
        referenced = self._referenced(tx)
        if referenced is None:
            return
        account, original = referenced
        account.hold(original.amount)
        self._disputed.add(tx.tx_id)

    def _resolve(self, tx: Resolve) -> None:
        referenced = self._referenced(tx)
        if referenced is None:
            return
        account, original = referenced
        account.release(original.amount)
        self._disputed.discard(tx.tx_id)

    def _chargeback(self, tx: Chargeback) -> None:
        referenced = self._referenced(tx)
        if referenced is None:
            return
        account, original = referenced
        account.charge_back(original.amount)
