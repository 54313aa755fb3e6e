"""
Application configuration management using Pydantic Settings.
Handles environment variables and default values for the service.
"""

from functools import lru_cache
from typing import List, Optional
from urllib.parse import urlparse

import pytz
from pydantic import Field, PrivateAttr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

from tibber_refiner.exceptions import ConfigurationError

DEFAULT_RETRIES = 10
DEFAULT_UPDATE_TIME = 0
DEFAULT_LOG_LEVEL = "info"

LOG_LEVELS = ("trace", "debug", "info", "warn", "error")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # InfluxDB Configuration
    influxdb_addr: str = Field(description="URL of the InfluxDB server, e.g. http://localhost:8086")
    influxdb_db_name: str = Field(description="InfluxDB database holding prices and refined values")
    price_measurement: str = Field(default="price_info", description="Measurement the hourly prices are read from")
    refined_measurement: str = Field(default="refined", description="Measurement refined values are written to")
    influxdb_timeout: int = Field(default=30, description="InfluxDB request timeout in seconds")

    # Tibber Configuration (accepted for deployment compatibility)
    credentials_file: str = Field(default="/credentials/credentials", description="Path to the credentials file")
    tibber_token: Optional[str] = Field(default=None, description="Tibber API access token", repr=False)

    # Scheduler Configuration
    update_time: int = Field(default=DEFAULT_UPDATE_TIME, ge=0, le=23, description="Hour of day new values are refined")
    retries: int = Field(default=DEFAULT_RETRIES, ge=1, description="Attempts per scheduled refinement")
    timezone: str = Field(default="Europe/Oslo", description="Timezone prices and hours are expressed in")

    # Logging Configuration
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Logging level")
    log_format: str = Field(default="text", description="Log format (json/text)")
    log_dir: str = Field(default="/var/log", description="Directory for the daily rolling log file")

    _config_warnings: List[str] = PrivateAttr(default_factory=list)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        level = str(value).strip().lower()
        if level not in LOG_LEVELS:
            return DEFAULT_LOG_LEVEL
        return level

    @model_validator(mode="wrap")
    @classmethod
    def parse_retries(cls, data, handler):
        # Unusable RETRIES falls back to the default; the warning is logged once logging is set up
        warnings = []
        if isinstance(data, dict) and data.get("retries") is not None:
            raw = data["retries"]
            try:
                retries = int(raw)
            except (TypeError, ValueError):
                retries = 0
            if retries < 1:
                warnings.append(f"Failed to parse RETRIES '{raw}', using default: {DEFAULT_RETRIES}")
                retries = DEFAULT_RETRIES
            data = {**data, "retries": retries}

        settings = handler(data)
        if isinstance(data, dict):
            settings._config_warnings = warnings
        return settings

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone '{value}'")
        return value

    @field_validator("influxdb_addr")
    @classmethod
    def validate_addr(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"INFLUXDB_ADDR must be an http(s) URL, got '{value}'")
        return value

    @property
    def config_warnings(self) -> List[str]:
        """Settings that were replaced by defaults while loading."""
        return list(self._config_warnings)

    @property
    def influxdb_host(self) -> str:
        return urlparse(self.influxdb_addr).hostname

    @property
    def influxdb_port(self) -> int:
        parsed = urlparse(self.influxdb_addr)
        if parsed.port:
            return parsed.port
        return 443 if parsed.scheme == "https" else 8086

    @property
    def influxdb_ssl(self) -> bool:
        return urlparse(self.influxdb_addr).scheme == "https"

    @property
    def influxdb_path(self) -> str:
        return urlparse(self.influxdb_addr).path.strip("/")


@lru_cache()
def get_settings() -> Settings:
    """
    Load settings once per process.

    Raises:
        ConfigurationError: If required variables are missing or a value is invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        problems = []
        for error in e.errors():
            name = ".".join(str(part) for part in error["loc"]).upper()
            problems.append(f"{name} ({error['msg']})")
        raise ConfigurationError(f"Invalid configuration: {', '.join(problems)}") from e
