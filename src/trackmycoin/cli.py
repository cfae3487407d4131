"""Command line entry point.

Usage:
    trackmycoin process
"""

import asyncio
import logging

import typer
from pydantic import ValidationError

from trackmycoin.container import Container
from trackmycoin.enrichment.service import EnrichmentSummary
from trackmycoin.exceptions import TrackerError

logger = logging.getLogger("trackmycoin.cli")

app = typer.Typer(add_completion=False, help="TrackMyCoin ledger price enricher")


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.WARNING)


async def _run(container: Container, run_timeout: float | None) -> EnrichmentSummary:
    http_client = container.http_client()
    try:
        enricher = container.enricher()
        if run_timeout:
            async with asyncio.timeout(run_timeout):
                return await enricher.run()
        return await enricher.run()
    finally:
        await http_client.close()


@app.callback()
def main() -> None:
    """Fill the future-price columns of a Google Sheets coin ledger."""


@app.command()
def process() -> None:
    """Read the ledger, fetch due prices from CoinGecko and write the ledger back."""
    container = Container()
    try:
        settings = container.settings()
    except ValidationError as exc:
        typer.echo(f"Error: invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    configure_logging(settings.log_level)
    logger.info("%s: starting process", settings.app_name)

    try:
        summary = asyncio.run(_run(container, settings.run_timeout))
    except TrackerError as exc:
        logger.error("Process failed: %s", exc)
        raise typer.Exit(code=1) from exc
    except TimeoutError as exc:
        logger.error("Process timed out after %ss", settings.run_timeout)
        raise typer.Exit(code=1) from exc
    except KeyboardInterrupt as exc:
        logger.warning("Interrupted")
        raise typer.Exit(code=130) from exc

    logger.info("Process completed successfully! %d rows written", summary.written)


if __name__ == "__main__":
    app()
