# config.py

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

DEFAULT_INPUT_PATH = "tickets.csv"
DEFAULT_ALL_TICKETS_PATH = "all_tickets_export.csv"
DEFAULT_STATUS_COUNTS_PATH = "statuses_count_export.csv"
DEFAULT_DELAY_SECONDS = 0.005


class Settings(BaseModel):
    api_endpoint: str
    api_key: str
    input_path: str = DEFAULT_INPUT_PATH
    all_tickets_path: str = DEFAULT_ALL_TICKETS_PATH
    status_counts_path: str = DEFAULT_STATUS_COUNTS_PATH
    delay: float = Field(DEFAULT_DELAY_SECONDS, ge=0)
    request_timeout: Optional[float] = Field(None, gt=0)  # None = wait forever

    @field_validator("api_endpoint", "api_key")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


def _float_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value


def load_settings(**overrides) -> Settings:
    """
    Build Settings from the environment (and a .env file if present).

    Keyword overrides win over the environment; overrides set to None are
    ignored so CLI flags that were not given fall through.
    """
    load_dotenv()

    raw = {
        "api_endpoint": os.getenv("API_ENDPOINT"),
        "api_key": os.getenv("API_KEY"),
        "input_path": os.getenv("TICKETS_CSV"),
        "all_tickets_path": os.getenv("ALL_TICKETS_EXPORT"),
        "status_counts_path": os.getenv("STATUS_COUNTS_EXPORT"),
        "delay": _float_env("TICKET_DELAY_SECONDS"),
        "request_timeout": _float_env("REQUEST_TIMEOUT_SECONDS"),
    }
    raw.update({k: v for k, v in overrides.items() if v is not None})

    missing = [k for k in ("api_endpoint", "api_key") if raw.get(k) is None]
    if missing:
        names = ", ".join(k.upper() for k in missing)
        raise ConfigError(f"Missing required configuration: {names}")

    try:
        return Settings(**{k: v for k, v in raw.items() if v is not None})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
