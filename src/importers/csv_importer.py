from __future__ import annotations

import csv
import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, Field, ValidationError, field_validator

from domain.transactions import (
    MAX_CLIENT_ID,
    MAX_TX_ID,
    Chargeback,
    Deposit,
    Dispute,
    Resolve,
    Transaction,
    TransactionType,
    Withdrawal,
)

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("type", "client", "tx")

_FUNDS_MOVEMENTS = {
    TransactionType.DEPOSIT: Deposit,
    TransactionType.WITHDRAWAL: Withdrawal,
}
_REFERENCES = {
    TransactionType.DISPUTE: Dispute,
    TransactionType.RESOLVE: Resolve,
    TransactionType.CHARGEBACK: Chargeback,
}


class TransactionParseError(Exception):
    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class TransactionRecord(BaseModel):
    """A single raw row of the transactions file."""

    type: TransactionType
    client: int = Field(ge=0, le=MAX_CLIENT_ID)
    tx: int = Field(ge=0, le=MAX_TX_ID)
    amount: Decimal | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: str | TransactionType) -> str | TransactionType:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("client", "tx", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _empty_amount(cls, value: str | Decimal | None) -> str | Decimal | None:
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                return None
        return value

    def to_transaction(self) -> Transaction:
        movement = _FUNDS_MOVEMENTS.get(self.type)
        if movement is not None:
            if self.amount is None:
                raise TransactionParseError(f"transaction {self.tx} is a {self.type} without an amount")
            return movement(client_id=self.client, tx_id=self.tx, amount=self.amount)
        return _REFERENCES[self.type](client_id=self.client, tx_id=self.tx)


class CsvTransactionImporter:
    """Stream typed transactions out of a ``type,client,tx,amount`` file.

    Rows are parsed lazily, so the engine consuming :meth:`iter_transactions`
    controls the pace of reading. The first malformed row raises
    :class:`TransactionParseError` and ends the stream.
    """

    def __init__(self, source_path: str | Path, *, delimiter: str = ",") -> None:
        self._source_path = Path(source_path)
        self._delimiter = delimiter

    def iter_transactions(self) -> Iterator[Transaction]:
        rows = 0
        with self._source_path.open(encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle, delimiter=self._delimiter)
            header = self._read_header(reader)
            for row in reader:
                if not any(cell.strip() for cell in row):
                    continue
                yield self._parse_row(header, row, line_number=reader.line_num)
                rows += 1
        logger.info("Read %d transactions from %s", rows, self._source_path)

    def load_transactions(self) -> list[Transaction]:
        return list(self.iter_transactions())

    def _read_header(self, reader: Iterator[list[str]]) -> list[str]:
        try:
            header = [name.strip().lower() for name in next(reader)]
        except StopIteration:
            raise TransactionParseError(f"{self._source_path} is empty or missing headers") from None

        missing = [column for column in REQUIRED_COLUMNS if column not in header]
        if missing:
            raise TransactionParseError(
                f"{self._source_path} missing required columns: {', '.join(missing)}", line_number=1
            )
        return header

    @staticmethod
    def _parse_row(header: list[str], row: list[str], *, line_number: int) -> Transaction:
        if len(row) > len(header):
            raise TransactionParseError(
                f"expected at most {len(header)} fields, got {len(row)}", line_number=line_number
            )
        # Trailing columns may be omitted, e.g. "dispute,1,1" without an amount field.
        values = dict(zip(header, row))
        try:
            record = TransactionRecord.model_validate(values)
            return record.to_transaction()
        except ValidationError as exc:
            raise TransactionParseError(f"invalid record {row!r}: {exc}", line_number=line_number) from exc
        except TransactionParseError as exc:
            raise TransactionParseError(str(exc), line_number=line_number) from exc
