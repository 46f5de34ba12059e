from pathlib import Path
from typing import Callable, Generator

import pytest

from config import config
from domain.ledger import LedgerEngine
from tests.helpers.csv_files import write_transactions_csv


@pytest.fixture(scope="function")
def engine() -> LedgerEngine:
    return LedgerEngine()


@pytest.fixture(scope="function")
def transactions_csv(tmp_path: Path) -> Callable[[list[str]], Path]:
    def _write(rows: list[str]) -> Path:
        return write_transactions_csv(tmp_path / "transactions.csv", rows)

    return _write


@pytest.fixture(autouse=True)
def _reset_config_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in ("PAYMENTS_LOG_LEVEL", "PAYMENTS_LOG_FORMAT", "PAYMENTS_AMOUNT_DECIMAL_PLACES"):
        monkeypatch.delenv(name, raising=False)
    config.cache_clear()
    yield
    config.cache_clear()
