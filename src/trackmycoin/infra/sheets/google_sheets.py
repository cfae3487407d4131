"""Google Sheets v4 ledger driver."""

import asyncio
import logging
from pathlib import Path
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build

from trackmycoin.config import Settings
from trackmycoin.exceptions import ConfigError, LedgerClearError, LedgerReadError, LedgerWriteError
from trackmycoin.infra.sheets.base import Cell, SheetInfo, SpreadsheetInfo

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class GoogleSheetsClient:
    """Async facade over the blocking googleapiclient Sheets service."""

    def __init__(self, service: Any) -> None:
        self._service = service

    @classmethod
    def from_service_account_file(cls, path: str | Path) -> "GoogleSheetsClient":
        try:
            credentials = service_account.Credentials.from_service_account_file(str(path), scopes=SCOPES)
            service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        except Exception as e:
            raise ConfigError(f"unable to create Sheets client from service account file {path}: {e}") from e
        return cls(service)

    @classmethod
    def from_api_key(cls, api_key: str) -> "GoogleSheetsClient":
        try:
            service = build("sheets", "v4", developerKey=api_key, cache_discovery=False)
        except Exception as e:
            raise ConfigError(f"unable to create Sheets client with API key: {e}") from e
        return cls(service)

    async def read_range(self, spreadsheet_id: str, range_: str) -> list[list[Cell]]:
        request = self._service.spreadsheets().values().get(spreadsheetId=spreadsheet_id, range=range_)
        try:
            response = await asyncio.to_thread(request.execute)
        except Exception as e:
            raise LedgerReadError(f"unable to retrieve data from sheet: {e}") from e
        return response.get("values", [])

    async def read_metadata(self, spreadsheet_id: str) -> SpreadsheetInfo:
        request = self._service.spreadsheets().get(spreadsheetId=spreadsheet_id)
        try:
            response = await asyncio.to_thread(request.execute)
        except Exception as e:
            raise LedgerReadError(f"unable to retrieve spreadsheet info: {e}") from e

        return SpreadsheetInfo(
            title=response.get("properties", {}).get("title", ""),
            sheets=[
                SheetInfo(title=s["properties"]["title"], sheet_id=s["properties"].get("sheetId", 0))
                for s in response.get("sheets", [])
            ],
        )

    async def clear_range(self, spreadsheet_id: str, range_: str) -> None:
        request = self._service.spreadsheets().values().clear(spreadsheetId=spreadsheet_id, range=range_, body={})
        try:
            await asyncio.to_thread(request.execute)
        except Exception as e:
            raise LedgerClearError(f"unable to clear range {range_}: {e}") from e

    async def write_range(self, spreadsheet_id: str, range_: str, values: list[list[Cell]]) -> None:
        request = self._service.spreadsheets().values().update(
            spreadsheetId=spreadsheet_id,
            range=range_,
            valueInputOption="RAW",
            body={"values": values},
        )
        try:
            await asyncio.to_thread(request.execute)
        except Exception as e:
            raise LedgerWriteError(f"unable to update data in sheet: {e}") from e


def build_ledger(settings: Settings) -> GoogleSheetsClient:
    """Service-account file wins over API key; neither usable is a ConfigError."""
    account_file = settings.google_service_account_file
    if account_file and Path(account_file).is_file():
        logger.info("Using Google service account file %s", account_file)
        return GoogleSheetsClient.from_service_account_file(account_file)

    if account_file:
        logger.warning("Service account file not found at %s", account_file)

    if settings.google_api_key:
        logger.info("Using Google API key")
        return GoogleSheetsClient.from_api_key(settings.google_api_key)

    raise ConfigError(
        "Google Sheets client is not initialized. Set GOOGLE_SERVICE_ACCOUNT_FILE or GOOGLE_API_KEY"
    )
