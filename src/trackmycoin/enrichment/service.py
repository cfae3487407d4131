"""LedgerEnricher — read the ledger, fill due prices, write it back."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

from trackmycoin.domain.models.record import PriceRecord
from trackmycoin.domain.policy import due_offsets
from trackmycoin.exceptions import DecodeError, LedgerClearError, LedgerReadError, OracleError, TimestampError
from trackmycoin.infra.sheets.base import LedgerDriver, SpreadsheetInfo
from trackmycoin.ledger.codec import decode_row, encode_record

logger = logging.getLogger(__name__)

FIRST_DATA_ROW = 2  # row 1 holds headers
FIRST_COLUMN = "A"
LAST_COLUMN = "R"
SEPARATOR = "=" * 22


class PriceOracle(Protocol):
    async def get_current_price(self, symbol: str) -> float: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class EnrichmentSummary:
    rows_read: int = 0  # including the header row
    records: int = 0
    parse_errors: list[str] = field(default_factory=list)
    timestamp_errors: list[str] = field(default_factory=list)
    missing: int = 0
    updated: int = 0
    price_errors: list[str] = field(default_factory=list)
    written: int = 0
    write_range: str | None = None


def resolve_sheet_name(read_range: str, info: SpreadsheetInfo) -> str:
    """Sheet to write back to.

    A range without "!" (including a bare sheet name) falls back to the first
    sheet of the spreadsheet, whatever that name was.
    """
    sheet_name = read_range.split("!", 1)[0] if "!" in read_range else read_range

    if not sheet_name or sheet_name == read_range:
        first = info.first_sheet_title
        if first is not None:
            sheet_name = first
    return sheet_name


def build_write_range(sheet_name: str, count: int) -> str:
    last_row = FIRST_DATA_ROW + count - 1
    return f"{sheet_name}!{FIRST_COLUMN}{FIRST_DATA_ROW}:{LAST_COLUMN}{last_row}"


def build_clear_range(sheet_name: str) -> str:
    return f"{sheet_name}!{FIRST_COLUMN}{FIRST_DATA_ROW}:{LAST_COLUMN}"


class LedgerEnricher:
    """One batch run: read → decode → fill missing prices → encode → clear + write.

    Records are processed strictly one after another, and within a record the
    Bybit price comes first, then the offsets in column order. Rows that fail to
    decode are dropped from the write-back; the clear before the write removes
    the leftover tail.
    """

    def __init__(
        self,
        ledger: LedgerDriver,
        oracle: PriceOracle,
        spreadsheet_id: str,
        sheet_range: str = "",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._ledger = ledger
        self._oracle = oracle
        self._spreadsheet_id = spreadsheet_id
        self._sheet_range = sheet_range
        self._clock = clock

    async def run(self) -> EnrichmentSummary:
        summary = EnrichmentSummary()
        logger.info("Spreadsheet ID: %s", self._spreadsheet_id)

        info = await self._ledger.read_metadata(self._spreadsheet_id)
        logger.info("Spreadsheet title: %s", info.title)
        logger.info("Available sheets: %d", len(info.sheets))
        for i, sheet in enumerate(info.sheets, start=1):
            logger.info("  Sheet %d: %s (ID: %d)", i, sheet.title, sheet.sheet_id)

        read_range = self._resolve_read_range(info)
        logger.info("Reading range: %s", read_range)

        rows = await self._ledger.read_range(self._spreadsheet_id, read_range)
        summary.rows_read = len(rows)
        if not rows:
            logger.info("No data found in spreadsheet")
            return summary
        if len(rows) < 2:
            logger.info("No data rows found (only headers)")
            return summary

        logger.info("Found %d rows, headers: %s", len(rows), rows[0])

        records = self._decode_rows(rows[1:], summary)
        await self.fill_missing_prices(records, summary)
        await self._write_back(info, read_range, records, summary)

        self._log_summary(summary)
        return summary

    def _resolve_read_range(self, info: SpreadsheetInfo) -> str:
        if self._sheet_range:
            return self._sheet_range
        first = info.first_sheet_title
        if first is None:
            raise LedgerReadError("no sheets found in spreadsheet")
        return first  # a bare sheet name reads the whole sheet

    def _decode_rows(self, rows: list[list], summary: EnrichmentSummary) -> list[PriceRecord]:
        records: list[PriceRecord] = []
        for i, row in enumerate(rows):
            row_num = i + FIRST_DATA_ROW
            try:
                record = decode_row(row)
            except DecodeError as e:
                msg = f"Row {row_num}: parse error: {e}"
                summary.parse_errors.append(msg)
                logger.warning(msg)
                continue
            records.append(record)
            logger.debug("Row %d: %s", row_num, record)

        summary.records = len(records)
        logger.info("Successfully parsed: %d records, parse errors: %d", len(records), len(summary.parse_errors))
        return records

    async def fill_missing_prices(self, records: list[PriceRecord], summary: EnrichmentSummary) -> None:
        """Fetch the Bybit price and every due offset price that is still empty.

        Oracle failures leave the cell at 0 and are collected in the summary.
        """
        now = self._clock()

        for record_num, record in enumerate(records, start=1):
            if record.coin == "":
                continue

            missing = 0
            updated = 0

            if record.bybit_price == 0:
                missing += 1
                price = await self._fetch(record_num, record, "Bybit price", summary)
                if price is not None:
                    record.bybit_price = price
                    updated += 1

            try:
                offsets = due_offsets(record, now)
            except TimestampError as e:
                msg = f"Record {record_num} ({record.coin}): {e}"
                summary.timestamp_errors.append(msg)
                logger.warning("%s, skipping offset prices", msg)
                offsets = []

            for offset in offsets:
                missing += 1
                price = await self._fetch(record_num, record, offset.value, summary)
                if price is not None:
                    record.set_offset(offset, price)
                    updated += 1

            if missing:
                logger.info("Record %d (%s): filled %d/%d missing prices", record_num, record.coin, updated, missing)
            summary.missing += missing
            summary.updated += updated

    async def _fetch(
        self, record_num: int, record: PriceRecord, field_name: str, summary: EnrichmentSummary
    ) -> float | None:
        logger.info("Record %d (%s): Missing %s, fetching from CoinGecko...", record_num, record.coin, field_name)
        try:
            price = await self._oracle.get_current_price(record.coin)
        except OracleError as e:
            msg = f"Record {record_num} ({record.coin}): failed to get {field_name}: {e}"
            summary.price_errors.append(msg)
            logger.warning(msg)
            return None
        logger.info("  Updated %s: $%.2f", field_name, price)
        return price

    async def _write_back(
        self,
        info: SpreadsheetInfo,
        read_range: str,
        records: list[PriceRecord],
        summary: EnrichmentSummary,
    ) -> None:
        if not records:
            logger.info("No records to update")
            return

        values = [encode_record(r) for r in records]
        sheet_name = resolve_sheet_name(read_range, info)
        write_range = build_write_range(sheet_name, len(values))
        clear_range = build_clear_range(sheet_name)

        logger.info("Clearing old data in range: %s", clear_range)
        try:
            await self._ledger.clear_range(self._spreadsheet_id, clear_range)
        except LedgerClearError as e:
            logger.warning("Failed to clear old data: %s", e)

        logger.info("Writing %d records to range: %s", len(values), write_range)
        await self._ledger.write_range(self._spreadsheet_id, write_range, values)

        summary.written = len(values)
        summary.write_range = write_range

    @staticmethod
    def _log_summary(summary: EnrichmentSummary) -> None:
        logger.info(SEPARATOR)
        logger.info("Price filling summary:")
        logger.info("Rows parsed: %d, parse errors: %d", summary.records, len(summary.parse_errors))
        logger.info("Total missing prices found: %d", summary.missing)
        logger.info("Successfully updated: %d", summary.updated)
        if summary.timestamp_errors:
            logger.info("Records with unparsable date/time: %d", len(summary.timestamp_errors))
        if summary.price_errors:
            logger.info("Failed to update: %d", len(summary.price_errors))
            for msg in summary.price_errors:
                logger.info("  - %s", msg)
        logger.info("Rows written: %d", summary.written)
        logger.info(SEPARATOR)

