from dependency_injector import containers, providers

from trackmycoin.config import Settings
from trackmycoin.enrichment.service import LedgerEnricher
from trackmycoin.infra.http.client import HttpClient
from trackmycoin.infra.price.coingecko import CoinGeckoProvider
from trackmycoin.infra.sheets.google_sheets import build_ledger


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        HttpClient,
        timeout=settings.provided.http_timeout,
    )

    oracle = providers.Singleton(
        CoinGeckoProvider,
        http_client=http_client,
        api_key=settings.provided.coingecko_api_key,
        base_url=settings.provided.coingecko_base_url,
    )

    ledger = providers.Singleton(build_ledger, settings=settings)

    enricher = providers.Factory(
        LedgerEnricher,
        ledger=ledger,
        oracle=oracle,
        spreadsheet_id=settings.provided.google_sheet_id,
        sheet_range=settings.provided.google_sheet_range,
    )
