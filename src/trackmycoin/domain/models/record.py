"""Domain types for a single ledger row of coin price observations."""

import re
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field, field_validator

from trackmycoin.domain.enums import PriceOffset
from trackmycoin.exceptions import TimestampError

# Ledger times are written in GMT+7
LEDGER_TZ = timezone(timedelta(hours=7), "GMT+7")

# strptime format plus the exact shape it must match: two-digit day, month,
# minute and second, a four-digit year, one space
DATE_TIME_FORMATS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("%d.%m.%Y %H:%M:%S", re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4} [0-9]{1,2}:[0-9]{2}:[0-9]{2}")),
    ("%d.%m.%Y %H:%M", re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4} [0-9]{1,2}:[0-9]{2}")),
    ("%Y-%m-%d %H:%M:%S", re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{1,2}:[0-9]{2}:[0-9]{2}")),
    ("%Y-%m-%d %H:%M", re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{1,2}:[0-9]{2}")),
)

OFFSET_COUNT = len(PriceOffset)


def _empty_offsets() -> list[float]:
    return [0.0] * OFFSET_COUNT


class PriceRecord(BaseModel):
    """One coin observation plus its future-price columns. A price of 0 means the cell is empty."""

    date: str = ""
    time: str = ""
    source: str = ""
    coin: str = ""
    direction: str = ""  # UP / DOWN / free text
    source_price: float = 0.0
    bybit_price: float = 0.0  # anchor price, fetched when empty
    offset_prices: list[float] = Field(default_factory=_empty_offsets)  # indexed by PriceOffset.position

    @field_validator("offset_prices")
    @classmethod
    def _check_offset_count(cls, value: list[float]) -> list[float]:
        if len(value) != OFFSET_COUNT:
            raise ValueError(f"expected {OFFSET_COUNT} offset prices, got {len(value)}")
        return value

    def get_offset(self, offset: PriceOffset) -> float:
        return self.offset_prices[offset.position]

    def set_offset(self, offset: PriceOffset, price: float) -> None:
        self.offset_prices[offset.position] = price

    @property
    def date_time(self) -> str:
        return f"{self.date} {self.time}"

    def __str__(self) -> str:
        return (
            f"Date: {self.date}, Time: {self.time}, Source: {self.source}, Coin: {self.coin}, "
            f"Direction: {self.direction}, SourcePrice: {self.source_price:.2f}, BybitPrice: {self.bybit_price:.2f}"
        )


def parse_anchor_time(record: PriceRecord) -> datetime:
    """Parse Date + Time as a GMT+7 instant. First matching format wins."""
    value = record.date_time
    for fmt, shape in DATE_TIME_FORMATS:
        if not shape.fullmatch(value):
            continue
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=LEDGER_TZ)
        except ValueError:
            continue
    raise TimestampError(value)
