"""Configuration management."""

import configparser
import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

from prodcal.errors import InvalidConfigError
from prodcal.fetcher import API_URL, DEFAULT_TIMEOUT

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "prodcal" / "config.ini"
DEFAULT_CACHE_TTL_SECONDS = 24 * 60 * 60


@dataclass
class Config:
    """Calendar source configuration."""

    access_token: str
    cache_ttl: timedelta = field(
        default_factory=lambda: timedelta(seconds=DEFAULT_CACHE_TTL_SECONDS)
    )
    timeout: float = DEFAULT_TIMEOUT
    base_url: str = API_URL
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config | None":
        """Load configuration from environment variables."""
        try:
            access_token = os.environ["PRODCAL_ACCESS_TOKEN"]
        except KeyError:
            return None
        try:
            return cls(
                access_token=access_token,
                cache_ttl=timedelta(
                    seconds=float(os.environ.get("PRODCAL_CACHE_TTL", DEFAULT_CACHE_TTL_SECONDS))
                ),
                timeout=float(os.environ.get("PRODCAL_TIMEOUT", DEFAULT_TIMEOUT)),
                base_url=os.environ.get("PRODCAL_BASE_URL", API_URL),
                log_level=os.environ.get("PRODCAL_LOG_LEVEL", "WARNING"),
            )
        except ValueError as exc:
            msg = f"Invalid PRODCAL_* environment variable: {exc}"
            raise InvalidConfigError(msg) from exc

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Config | None":
        """Load configuration from file."""
        if not path.is_file():
            return None

        config = configparser.ConfigParser(interpolation=None)
        try:
            config.read(path)
            section = config["prodcal"]
            return cls(
                access_token=section["accessToken"],
                cache_ttl=timedelta(
                    seconds=section.getfloat("cacheTtl", DEFAULT_CACHE_TTL_SECONDS)
                ),
                timeout=section.getfloat("timeout", DEFAULT_TIMEOUT),
                base_url=section.get("baseUrl", API_URL),
                log_level=section.get("logLevel", "WARNING"),
            )
        except KeyError as exc:
            msg = f"Missing {exc} in {path}"
            raise InvalidConfigError(msg) from exc
        except (configparser.Error, ValueError) as exc:
            msg = f"Invalid configuration file {path}: {exc}"
            raise InvalidConfigError(msg) from exc

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        config = configparser.ConfigParser(interpolation=None)
        config["prodcal"] = {
            "accessToken": self.access_token,
            "cacheTtl": str(int(self.cache_ttl.total_seconds())),
            "timeout": str(self.timeout),
            "baseUrl": self.base_url,
            "logLevel": self.log_level,
        }
        with path.open("w") as config_file:
            config.write(config_file)
