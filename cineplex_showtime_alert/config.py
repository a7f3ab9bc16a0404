#!/usr/bin/env python3
"""
Configuration loading for the Cineplex Showtime Alert.
Settings come from a JSON config file; the API subscription key comes from the
environment, optionally seeded from a local .env file.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

# Path constants
DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_ENV_PATH = ".env"

# Environment variable holding the API subscription key
SUBSCRIPTION_KEY_ENV = "OCP_APIM_SUBSCRIPTION_KEY"
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"

# Cineplex API constants
DEFAULT_API_URL = "https://apis.cineplex.com/prod/cpx/theatrical/api/v1/showtimes"
DEFAULT_LANGUAGE = "en"
DEFAULT_LOCATION_ID = 1405  # Cineplex Cinemas Langley
DEFAULT_TARGET_DATE = "7/30/2023"
DEFAULT_EXPERIENCE_FILTER = "imax"
DEFAULT_EXPERIENCE_TAG = "70mm"

# Schedule constants
DEFAULT_INTERVAL_MINUTES = 15
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class AlertConfig:
    """Settings for one alert process, built once at startup"""

    subscription_key: str = ""
    api_url: str = DEFAULT_API_URL
    language: str = DEFAULT_LANGUAGE
    location_id: int = DEFAULT_LOCATION_ID
    target_date: str = DEFAULT_TARGET_DATE
    experience_filter: str = DEFAULT_EXPERIENCE_FILTER
    experience_tag: str = DEFAULT_EXPERIENCE_TAG
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    console_level: str = "INFO"
    enable_file_logging: bool = False
    file_level: str = "DEBUG"
    logs_dir: str = "logs"

    def request_params(self) -> Dict[str, str]:
        """Query parameters for the showtime endpoint"""
        return {
            "language": self.language,
            "locationId": str(self.location_id),
            "date": self.target_date,
            "experiences": self.experience_filter,
        }

    def request_headers(self) -> Dict[str, str]:
        # An unset key is still sent; the API rejects it
        return {SUBSCRIPTION_KEY_HEADER: self.subscription_key or ""}


def load_env_file(env_path: str = DEFAULT_ENV_PATH) -> None:
    """Load environment variables from .env file"""
    env_file = Path(env_path)
    if env_file.exists():
        with open(env_file, "r") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    value = value.strip().strip("\"'")
                    os.environ[key.strip()] = value


def _read_config_file(config_path: str) -> Dict:
    """Load configuration from JSON file"""
    try:
        with open(config_path, "r") as f:
            return json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")


def load_config(
    config_path: str = DEFAULT_CONFIG_PATH, env_path: str = DEFAULT_ENV_PATH
) -> AlertConfig:
    """
    Build the alert configuration

    Args:
        config_path: Path to JSON configuration file
        env_path: Path to optional .env file merged into the environment

    Returns:
        AlertConfig populated from the file and environment
    """
    raw = _read_config_file(config_path)
    if not isinstance(raw, dict):
        raise ValueError("Invalid config file: top-level value must be an object")

    load_env_file(env_path)

    cineplex = raw.get("cineplex", {})
    schedule_cfg = raw.get("schedule", {})
    logging_cfg = raw.get("logging", {})
    output_cfg = raw.get("output", {})

    return AlertConfig(
        subscription_key=os.getenv(SUBSCRIPTION_KEY_ENV, ""),
        api_url=cineplex.get("api_url", DEFAULT_API_URL),
        language=cineplex.get("language", DEFAULT_LANGUAGE),
        location_id=int(cineplex.get("location_id", DEFAULT_LOCATION_ID)),
        target_date=cineplex.get("target_date", DEFAULT_TARGET_DATE),
        experience_filter=cineplex.get("experience_filter", DEFAULT_EXPERIENCE_FILTER),
        experience_tag=cineplex.get("experience_tag", DEFAULT_EXPERIENCE_TAG),
        interval_minutes=int(
            schedule_cfg.get("interval_minutes", DEFAULT_INTERVAL_MINUTES)
        ),
        request_timeout=float(
            schedule_cfg.get("request_timeout", DEFAULT_REQUEST_TIMEOUT_SECONDS)
        ),
        console_level=logging_cfg.get("console_level", "INFO"),
        enable_file_logging=bool(logging_cfg.get("enable_file_logging", False)),
        file_level=logging_cfg.get("file_level", "DEBUG"),
        logs_dir=output_cfg.get("logs_dir", "logs"),
    )
