"""Error hierarchy for the ledger enrichment job.

Only ConfigError, LedgerReadError and LedgerWriteError abort a run; every
other error is recorded against the row or cell it concerns and the run goes on.
"""


class TrackerError(Exception):
    """Base class for all trackmycoin errors."""


class ConfigError(TrackerError):
    """Credentials or settings are missing or unusable."""


class DecodeError(TrackerError):
    """A ledger row cannot be turned into a PriceRecord."""


class TimestampError(TrackerError):
    """A record's Date + Time cells match none of the accepted formats."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"unable to parse date/time: {value}")


class ExternalServiceError(TrackerError):
    """A remote service (spreadsheet backend or price oracle) failed."""


class LedgerError(ExternalServiceError):
    pass


class LedgerReadError(LedgerError):
    pass


class LedgerClearError(LedgerError):
    pass


class LedgerWriteError(LedgerError):
    pass


class OracleError(ExternalServiceError):
    pass


class OraclePriceMissingError(OracleError):
    """2xx response without a `<id>.usd` entry."""


class OracleRateLimitedError(OracleError):
    """Still getting 429 after the last retry."""

    def __init__(self, retries: int) -> None:
        self.retries = retries
        super().__init__(f"CoinGecko rate limit exceeded after {retries} retries")


class OracleStatusError(OracleError):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"CoinGecko API error: status {status_code}")


class OracleTransportError(OracleError):
    pass
