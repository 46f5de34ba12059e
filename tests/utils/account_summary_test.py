from decimal import Decimal, InvalidOperation
from io import StringIO

import pytest

from domain.ledger import LedgerEngine
from tests.constants import REPORT_HEADER_LINE
from tests.helpers.transaction_factory import chargeback, deposit, dispute, withdrawal
from utils.account_summary import AccountSummary, compute_account_summary, render_account_summary


def test_compute_account_summary_is_sorted_by_client(engine: LedgerEngine) -> None:
    engine.process([deposit(9, 1, "1"), deposit(2, 2, "2"), withdrawal(5, 3, "1")])

    summaries = compute_account_summary(engine)

    assert [summary.client_id for summary in summaries] == [2, 5, 9]
    assert summaries[0] == AccountSummary(
        client_id=2,
        available=Decimal(2),
        held=Decimal(0),
        total=Decimal(2),
        locked=False,
    )


def test_render_account_summary_writes_csv(engine: LedgerEngine) -> None:
    engine.process(
        [
            deposit(1, 1, "5.0"),
            deposit(1, 2, "3.0"),
            withdrawal(1, 3, "4.0"),
            deposit(2, 10, "10.0"),
            dispute(2, 10),
            deposit(3, 11, "1.23456"),
            deposit(4, 12, "2"),
            dispute(4, 12),
            chargeback(4, 12),
        ]
    )
    out = StringIO()

    render_account_summary(compute_account_summary(engine), decimal_places=4, out=out)

    assert out.getvalue().splitlines() == [
        REPORT_HEADER_LINE,
        "1,4,0,4,false",
        "2,0,10,10,false",
        "3,1.2346,0,1.2346,false",
        "4,0,0,0,true",
    ]


def test_render_empty_summary_writes_only_header() -> None:
    out = StringIO()

    render_account_summary([], decimal_places=4, out=out)

    assert out.getvalue() == REPORT_HEADER_LINE + "\n"


def test_render_writes_nothing_when_a_row_cannot_be_formatted() -> None:
    good = AccountSummary(client_id=1, available=Decimal(1), held=Decimal(0), total=Decimal(1), locked=False)
    broken = AccountSummary(
        client_id=2, available=Decimal(0), held=Decimal("sNaN"), total=Decimal(0), locked=False
    )
    out = StringIO()

    with pytest.raises(InvalidOperation):
        render_account_summary([good, broken], decimal_places=4, out=out)

    assert out.getvalue() == ""
