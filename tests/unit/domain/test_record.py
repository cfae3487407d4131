"""Tests for PriceRecord and anchor time parsing."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from trackmycoin.domain.enums import PriceOffset
from trackmycoin.domain.models.record import LEDGER_TZ, PriceRecord, parse_anchor_time
from trackmycoin.exceptions import TimestampError


class TestPriceOffset:
    def test_order_and_count(self):
        assert len(PriceOffset) == 11
        assert [o.position for o in PriceOffset] == list(range(11))
        assert list(PriceOffset)[0] is PriceOffset.MIN_10
        assert list(PriceOffset)[-1] is PriceOffset.MONTH_1

    def test_durations(self):
        assert PriceOffset.MIN_10.duration == timedelta(minutes=10)
        assert PriceOffset.HOUR_24.duration == timedelta(hours=24)
        assert PriceOffset.DAY_3.duration == timedelta(hours=72)
        assert PriceOffset.MONTH_1.duration == timedelta(hours=30 * 24)

    def test_durations_strictly_increase(self):
        durations = [o.duration for o in PriceOffset]
        assert durations == sorted(durations)
        assert len(set(durations)) == len(durations)


class TestPriceRecord:
    def test_defaults_are_empty(self):
        record = PriceRecord()
        assert record.coin == ""
        assert record.bybit_price == 0
        assert record.offset_prices == [0.0] * 11

    def test_offsets_not_shared_between_records(self):
        a = PriceRecord()
        b = PriceRecord()
        a.set_offset(PriceOffset.HOUR_1, 10.0)
        assert b.get_offset(PriceOffset.HOUR_1) == 0

    def test_set_and_get_offset(self):
        record = PriceRecord()
        record.set_offset(PriceOffset.DAY_5, 123.45)
        assert record.get_offset(PriceOffset.DAY_5) == 123.45
        assert record.offset_prices[8] == 123.45

    def test_wrong_offset_count_rejected(self):
        with pytest.raises(ValidationError):
            PriceRecord(offset_prices=[1.0, 2.0])

    def test_date_time(self):
        record = PriceRecord(date="29.12.2025", time="10:30:00")
        assert record.date_time == "29.12.2025 10:30:00"

    def test_str(self):
        record = PriceRecord(
            date="29.12.2025",
            time="10:30:00",
            source="Binance",
            coin="BTC",
            direction="UP",
            source_price=45000.50,
            bybit_price=45010.00,
        )
        text = str(record)
        assert "BTC" in text
        assert "Binance" in text
        assert "45000.50" in text


class TestParseAnchorTime:
    @pytest.mark.parametrize(
        "date,time,expected",
        [
            ("29.12.2025", "10:30:00", datetime(2025, 12, 29, 10, 30, 0)),
            ("29.12.2025", "10:30", datetime(2025, 12, 29, 10, 30)),
            ("2025-12-29", "10:30:15", datetime(2025, 12, 29, 10, 30, 15)),
            ("2025-12-29", "10:30", datetime(2025, 12, 29, 10, 30)),
            ("29.12.2025", "9:05", datetime(2025, 12, 29, 9, 5)),
        ],
    )
    def test_accepted_formats(self, date, time, expected):
        parsed = parse_anchor_time(PriceRecord(date=date, time=time))
        assert parsed == expected.replace(tzinfo=LEDGER_TZ)

    def test_zone_is_gmt_plus_7(self):
        parsed = parse_anchor_time(PriceRecord(date="29.12.2025", time="10:30:00"))
        assert parsed.utcoffset() == timedelta(hours=7)
        assert parsed == datetime(2025, 12, 29, 3, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "date,time",
        [
            ("invalid", "date"),
            ("", ""),
            ("29/12/2025", "10:30"),
            ("29.12.2025", ""),
            ("1.12.2025", "10:30:00"),
            ("29.1.2025", "10:30"),
            ("29.12.2025", "10:5"),
            ("29.12.2025 ", "10:30"),
            ("2025-1-5", "9:05"),
            ("29.12.2025", "10:30:00 "),
            ("29.12.2025", "10:30:5"),
        ],
    )
    def test_unparsable(self, date, time):
        with pytest.raises(TimestampError, match="unable to parse date/time"):
            parse_anchor_time(PriceRecord(date=date, time=time))
