from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from trackmycoin.domain.models.record import LEDGER_TZ
from trackmycoin.infra.sheets.base import SheetInfo, SpreadsheetInfo
from trackmycoin.ledger.codec import HEADERS

HEADER_ROW = list(HEADERS)


class FakeLedger:
    """In-memory ledger driver that records every call in order."""

    def __init__(self, rows: list[list], sheets: tuple[str, ...] = ("Sheet1",)) -> None:
        self.rows = rows
        self.info = SpreadsheetInfo(
            title="Tracker",
            sheets=[SheetInfo(title=title, sheet_id=i) for i, title in enumerate(sheets)],
        )
        self.calls: list[tuple] = []
        self.clear_error: Exception | None = None
        self.write_error: Exception | None = None

    async def read_metadata(self, spreadsheet_id: str) -> SpreadsheetInfo:
        self.calls.append(("read_metadata", spreadsheet_id))
        return self.info

    async def read_range(self, spreadsheet_id: str, range_: str) -> list[list]:
        self.calls.append(("read_range", range_))
        return self.rows

    async def clear_range(self, spreadsheet_id: str, range_: str) -> None:
        self.calls.append(("clear_range", range_))
        if self.clear_error is not None:
            raise self.clear_error

    async def write_range(self, spreadsheet_id: str, range_: str, values: list[list]) -> None:
        self.calls.append(("write_range", range_, values))
        if self.write_error is not None:
            raise self.write_error


@pytest.fixture()
def make_ledger():
    def _make(rows: list[list], sheets: tuple[str, ...] = ("Sheet1",)) -> FakeLedger:
        return FakeLedger([HEADER_ROW, *rows], sheets=sheets)

    return _make


@pytest.fixture()
def oracle():
    mock = AsyncMock()
    mock.get_current_price = AsyncMock(return_value=100.0)
    return mock


@pytest.fixture()
def gmt7():
    def _at(*args: int) -> datetime:
        return datetime(*args, tzinfo=LEDGER_TZ)

    return _at


@pytest.fixture()
def fake_ledger_cls():
    return FakeLedger
