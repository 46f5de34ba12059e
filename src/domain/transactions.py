from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import NewType, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

ClientId = NewType("ClientId", int)
TxId = NewType("TxId", int)

MAX_CLIENT_ID = 2**16 - 1
MAX_TX_ID = 2**32 - 1


class TransactionType(StrEnum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class _TransactionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    client_id: ClientId = Field(ge=0, le=MAX_CLIENT_ID)
    tx_id: TxId = Field(ge=0, le=MAX_TX_ID)


class _FundsMovement(_TransactionBase):
    amount: Decimal

    @model_validator(mode="after")
    def _validate_amount(self) -> _FundsMovement:
        if not self.amount.is_finite():
            raise ValueError("amount must be a finite number")
        if self.amount < 0:
            raise ValueError("amount must be >= 0")
        return self


class Deposit(_FundsMovement):
    pass


class Withdrawal(_FundsMovement):
    pass


class Dispute(_TransactionBase):
    """Claim that a previous deposit or withdrawal was erroneous."""


class Resolve(_TransactionBase):
    """Close a dispute, releasing held funds back to the client."""


class Chargeback(_TransactionBase):
    """Final state of a dispute: funds are withdrawn and the account frozen."""


FundsMovement: TypeAlias = Deposit | Withdrawal
Transaction: TypeAlias = Deposit | Withdrawal | Dispute | Resolve | Chargeback


def transaction_type(tx: Transaction) -> TransactionType:
    match tx:
        case Deposit():
            return TransactionType.DEPOSIT
        case Withdrawal():
            return TransactionType.WITHDRAWAL
        case Dispute():
            return TransactionType.DISPUTE
        case Resolve():
            return TransactionType.RESOLVE
        case Chargeback():
            return TransactionType.CHARGEBACK
    raise TypeError(f"Unsupported transaction {tx!r}")
