"""When does a future-price column become due for fetching."""

from datetime import datetime

from trackmycoin.domain.enums import PriceOffset
from trackmycoin.domain.models.record import PriceRecord, parse_anchor_time


def is_due(record: PriceRecord, offset: PriceOffset, now: datetime) -> bool:
    """True when the cell is empty and anchor + offset has been reached (inclusive).

    Filled cells short-circuit to False without touching the timestamp.
    Raises TimestampError when the anchor cannot be parsed.
    """
    if record.get_offset(offset) != 0:
        return False

    target = parse_anchor_time(record) + offset.duration
    return now >= target


def due_offsets(record: PriceRecord, now: datetime) -> list[PriceOffset]:
    """All due offsets of a record, in column order.

    The anchor is parsed once; an unparsable anchor raises TimestampError
    unless every offset is already filled.
    """
    empty = [offset for offset in PriceOffset if record.get_offset(offset) == 0]
    if not empty:
        return []

    anchor = parse_anchor_time(record)
    return [offset for offset in empty if now >= anchor + offset.duration]
