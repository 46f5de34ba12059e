from decimal import Decimal

import pytest
from pydantic import ValidationError

from domain.transactions import (
    MAX_CLIENT_ID,
    Chargeback,
    Deposit,
    Dispute,
    Resolve,
    TransactionType,
    Withdrawal,
    transaction_type,
)


def test_transaction_type_matches_wire_names() -> None:
    assert transaction_type(Deposit(client_id=1, tx_id=1, amount=Decimal(1))) == "deposit"
    assert transaction_type(Withdrawal(client_id=1, tx_id=2, amount=Decimal(1))) == "withdrawal"
    assert transaction_type(Dispute(client_id=1, tx_id=1)) == TransactionType.DISPUTE
    assert transaction_type(Resolve(client_id=1, tx_id=1)) == TransactionType.RESOLVE
    assert transaction_type(Chargeback(client_id=1, tx_id=1)) == TransactionType.CHARGEBACK


def test_negative_amount_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Deposit(client_id=1, tx_id=1, amount=Decimal("-1"))


def test_client_id_must_fit_in_sixteen_bits() -> None:
    Deposit(client_id=MAX_CLIENT_ID, tx_id=1, amount=Decimal(1))

    with pytest.raises(ValidationError):
        Deposit(client_id=MAX_CLIENT_ID + 1, tx_id=1, amount=Decimal(1))


def test_transactions_are_immutable() -> None:
    tx = Withdrawal(client_id=1, tx_id=1, amount=Decimal(1))

    with pytest.raises(ValidationError):
        tx.amount = Decimal(2)  # type: ignore[misc]


def test_reference_transactions_carry_no_amount() -> None:
    assert "amount" not in Dispute.model_fields
    assert "amount" in Deposit.model_fields
