"""
Service Configuration

Settings come from the environment, optionally seeded from a .env file.
Copy .env.example to .env to override the defaults.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_API_ENDPOINT = "https://www.energy.gov/sites/prod/files/2020/12/f81/code-12-15-2020.json"
DEFAULT_DATA_FILE = "./data/sampledata.json"

SOURCE_KINDS = ("file", "http")
LOG_LEVELS = ("CRITICAL", "FATAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET")


class ServiceConfig(BaseModel):
    """Runtime settings for the release stats service."""
    release_source: str = Field("file", description="Release backend (file or http)")
    data_file: str = Field(DEFAULT_DATA_FILE, description="code.json file for the file backend")
    api_endpoint: str = Field(DEFAULT_API_ENDPOINT, description="code.json URL for the http backend")
    api_timeout: float = Field(30.0, gt=0, description="HTTP request timeout in seconds")
    cache_enabled: bool = Field(False, description="Keep loaded releases for the process lifetime")
    strict: bool = Field(True, description="Fail on malformed release records instead of skipping")
    api_host: str = Field("0.0.0.0", description="Server bind host")
    api_port: int = Field(8080, ge=1, le=65535, description="Server port")
    log_level: str = Field("INFO", description="Logging level name")

    @field_validator("release_source")
    @classmethod
    def check_source_kind(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in SOURCE_KINDS:
            raise ValueError(f"RELEASE_SOURCE must be one of {', '.join(SOURCE_KINDS)}, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return value


def load_config(env_file: Optional[str] = None) -> ServiceConfig:
    """
    Load configuration from the environment.

    Args:
        env_file: Optional .env path; by default a .env in the working
            directory (or its parents) is used if present

    Returns:
        ServiceConfig populated from environment variables

    Raises:
        ValueError: If a variable holds an invalid value
    """
    load_dotenv(env_file)

    env_map = {
        'release_source': 'RELEASE_SOURCE',
        'data_file': 'RELEASE_DATA_FILE',
        'api_endpoint': 'RELEASE_API_ENDPOINT',
        'api_timeout': 'RELEASE_API_TIMEOUT',
        'cache_enabled': 'RELEASE_CACHE_ENABLED',
        'strict': 'RELEASE_STRICT',
        'api_host': 'API_HOST',
        'api_port': 'API_PORT',
        'log_level': 'LOG_LEVEL',
    }

    values = {
        field: os.getenv(var)
        for field, var in env_map.items()
        if os.getenv(var) not in (None, "")
    }

    config = ServiceConfig(**values)
    logger.debug(f"Configuration loaded: source={config.release_source}, cache={config.cache_enabled}")
    return config
