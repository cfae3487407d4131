"""Row codec — positional mapping between ledger rows (A..R) and PriceRecord."""

import math
import re
from collections.abc import Sequence
from typing import Any

from trackmycoin.domain.enums import PriceOffset
from trackmycoin.domain.models.record import PriceRecord
from trackmycoin.exceptions import DecodeError

COLUMN_COUNT = 18
MIN_COLUMNS = 5

# Column indexes
DATE, TIME, SOURCE, COIN, DIRECTION, SOURCE_PRICE, BYBIT_PRICE = range(7)
FIRST_OFFSET_COLUMN = 7

# Plain ASCII decimal as the sheet exports it: no padding, separators or other digits
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

HEADERS: list[str] = [
    "Date",
    "Time",
    "Source",
    "Coin",
    "Direction",
    "Source Price",
    "Bybit Price",
    "+10m",
    "+30m",
    "+1h",
    "+2h",
    "+6h",
    "+12h",
    "+24h",
    "+3d",
    "+5d",
    "+7d",
    "+1M",
]


def _cell_str(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index])


def _cell_float(row: Sequence[Any], index: int) -> float:
    """Empty, missing or unparsable cells read as 0."""
    if index >= len(row) or row[index] is None:
        return 0.0
    raw = row[index]
    if raw == "" or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str) and not _DECIMAL.fullmatch(raw):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def _price_cell(value: float) -> float | str:
    return "" if value == 0 else value


def decode_row(row: Sequence[Any]) -> PriceRecord:
    """Build a PriceRecord from a ledger row. Trailing cells may be missing."""
    if len(row) < MIN_COLUMNS:
        raise DecodeError(f"invalid row: expected at least {MIN_COLUMNS} columns, got {len(row)}")

    return PriceRecord(
        date=_cell_str(row, DATE),
        time=_cell_str(row, TIME),
        source=_cell_str(row, SOURCE),
        coin=_cell_str(row, COIN),
        direction=_cell_str(row, DIRECTION),
        source_price=_cell_float(row, SOURCE_PRICE),
        bybit_price=_cell_float(row, BYBIT_PRICE),
        offset_prices=[_cell_float(row, FIRST_OFFSET_COLUMN + offset.position) for offset in PriceOffset],
    )


def encode_record(record: PriceRecord) -> list[Any]:
    """Exactly COLUMN_COUNT cells; empty prices become empty strings."""
    return [
        record.date,
        record.time,
        record.source,
        record.coin,
        record.direction,
        _price_cell(record.source_price),
        _price_cell(record.bybit_price),
        *(_price_cell(record.get_offset(offset)) for offset in PriceOffset),
    ]
