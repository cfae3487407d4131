"""Ledger driver interface consumed by the enrichment job."""

from typing import Any, Protocol

from pydantic import BaseModel

Cell = Any  # str | None on read; str | float on write


class SheetInfo(BaseModel):
    title: str
    sheet_id: int


class SpreadsheetInfo(BaseModel):
    title: str
    sheets: list[SheetInfo] = []

    @property
    def first_sheet_title(self) -> str | None:
        return self.sheets[0].title if self.sheets else None


class LedgerDriver(Protocol):
    async def read_range(self, spreadsheet_id: str, range_: str) -> list[list[Cell]]: ...

    async def read_metadata(self, spreadsheet_id: str) -> SpreadsheetInfo: ...

    async def clear_range(self, spreadsheet_id: str, range_: str) -> None: ...

    async def write_range(self, spreadsheet_id: str, range_: str, values: list[list[Cell]]) -> None:
        """Overwrite range_ with values, stored RAW (no server-side type coercion)."""
        ...
