from __future__ import annotations

import csv
import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import TextIO

from domain.ledger import LedgerEngine
from domain.transactions import ClientId

from .formatting import format_amount, format_bool

REPORT_HEADER = ("client", "available", "held", "total", "locked")


@dataclass(frozen=True)
class AccountSummary:
    client_id: ClientId
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


def compute_account_summary(engine: LedgerEngine) -> list[AccountSummary]:
    """Snapshot every account known to the engine, ordered by client id."""
    return [
        AccountSummary(
            client_id=client_id,
            available=account.available,
            held=account.held,
            total=account.total,
            locked=account.locked,
        )
        for client_id, account in sorted(engine.accounts.items(), key=lambda item: item[0])
    ]


def render_account_summary(
    summaries: list[AccountSummary],
    *,
    decimal_places: int,
    out: TextIO | None = None,
) -> None:
    # Rows are fully formatted before the header is written.
    rows = [
        (
            str(summary.client_id),
            format_amount(summary.available, decimal_places),
            format_amount(summary.held, decimal_places),
            format_amount(summary.total, decimal_places),
            format_bool(summary.locked),
        )
        for summary in summaries
    ]

    writer = csv.writer(out or sys.stdout, lineterminator="\n")
    writer.writerow(REPORT_HEADER)
    writer.writerows(rows)
