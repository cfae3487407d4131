from datetime import timedelta
from enum import Enum


class PriceOffset(str, Enum):
    """Future-price columns H..R, in ledger order."""

    MIN_10 = "Price10Min"
    MIN_30 = "Price30Min"
    HOUR_1 = "Price1Hour"
    HOUR_2 = "Price2Hours"
    HOUR_6 = "Price6Hours"
    HOUR_12 = "Price12Hours"
    HOUR_24 = "Price24Hours"
    DAY_3 = "Price3Days"
    DAY_5 = "Price5Days"
    DAY_7 = "Price7Days"
    MONTH_1 = "Price1Month"

    @property
    def duration(self) -> timedelta:
        return _DURATIONS[self]

    @property
    def position(self) -> int:
        return _ORDER.index(self)


_DURATIONS: dict[PriceOffset, timedelta] = {
    PriceOffset.MIN_10: timedelta(minutes=10),
    PriceOffset.MIN_30: timedelta(minutes=30),
    PriceOffset.HOUR_1: timedelta(hours=1),
    PriceOffset.HOUR_2: timedelta(hours=2),
    PriceOffset.HOUR_6: timedelta(hours=6),
    PriceOffset.HOUR_12: timedelta(hours=12),
    PriceOffset.HOUR_24: timedelta(hours=24),
    PriceOffset.DAY_3: timedelta(days=3),
    PriceOffset.DAY_5: timedelta(days=5),
    PriceOffset.DAY_7: timedelta(days=7),
    PriceOffset.MONTH_1: timedelta(days=30),  # fixed 30 x 24h, not a calendar month
}

_ORDER: list[PriceOffset] = list(PriceOffset)
