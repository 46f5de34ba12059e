from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from config import config
from domain.ledger import LedgerEngine, LedgerError
from importers.csv_importer import CsvTransactionImporter, TransactionParseError
from utils.account_summary import compute_account_summary, render_account_summary

logger = logging.getLogger(__name__)


def run(csv_path: Path, *, decimal_places: int, out: TextIO | None = None) -> LedgerEngine:
    importer = CsvTransactionImporter(csv_path)
    engine = LedgerEngine()

    processed = engine.process(importer.iter_transactions())
    logger.info("Applied %d transactions to %d accounts", processed, len(engine.accounts))

    render_account_summary(compute_account_summary(engine), decimal_places=decimal_places, out=out)
    return engine


def main(argv: Sequence[str] | None = None) -> int:
    settings = config()
    logging.basicConfig(level=settings.log_level, format=settings.log_format, stream=sys.stderr)

    parser = argparse.ArgumentParser(
        prog="payments-engine",
        description="Apply a CSV stream of transactions and print the resulting client accounts.",
    )
    parser.add_argument("transactions", type=Path, help="CSV file with type,client,tx,amount columns")
    args = parser.parse_args(argv)

    try:
        run(args.transactions, decimal_places=settings.amount_decimal_places)
    except (TransactionParseError, LedgerError, OSError) as exc:
        logger.error("Processing %s failed: %s", args.transactions, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
