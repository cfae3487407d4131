import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "TrackMyCoin"
    google_api_key: str = ""
    google_service_account_file: str = "service-account-file.json"
    google_sheet_id: str = "1zDO5I9ZWnT9AbD--RT9NZX3aQgem6d1FEleq0ISsElk"
    google_sheet_range: str = ""  # empty = whole first sheet
    tg_bot_token: str = ""  # reserved, not used by the enrichment run
    tg_chat_id: str = ""
    tg_timeout: float = 10.0
    coingecko_api_key: str = ""
    coingecko_base_url: str = "https://api.coingecko.com"
    http_timeout: float = 30.0
    run_timeout: float | None = None  # seconds; None = no deadline
    log_level: str = "INFO"

    @field_validator("app_name")
    @classmethod
    def _app_name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("APP_NAME must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got {value!r}")
        return level

    class Config:
        env_file = ".env"
        extra = "ignore"
