"""Configuration settings for the closest-aircraft service."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    environment: str = os.getenv("CLOSEST_AIRCRAFT_ENV", "local")
    log_level: str = os.getenv("CLOSEST_AIRCRAFT_LOG_LEVEL", "INFO")

    # Observer location (defaults to central London)
    observer_lat: float = float(os.getenv("OBSERVER_LAT", "51.5074"))
    observer_lon: float = float(os.getenv("OBSERVER_LON", "-0.1278"))

    # dump1090 feed
    feed_host: str = os.getenv("FEED_HOST", "127.0.0.1")
    feed_port: int = int(os.getenv("FEED_PORT", "8080"))
    feed_timeout: float = float(os.getenv("FEED_TIMEOUT", "10.0"))

    # Aircraft registry lookup
    enrichment_base_url: str = os.getenv("ENRICHMENT_BASE_URL", "https://api.adsb.lol")
    enrichment_timeout: float = float(os.getenv("ENRICHMENT_TIMEOUT", "10.0"))

    max_payload_bytes: int = int(os.getenv("MAX_PAYLOAD_BYTES", str(8 * 1024 * 1024)))

    # Refresh loop and alerting
    refresh_interval_seconds: float = float(os.getenv("REFRESH_INTERVAL_SECONDS", "5.0"))
    proximity_alert_km: float = float(os.getenv("PROXIMITY_ALERT_KM", "5.0"))
    enable_refresh_loop: bool = _get_bool("ENABLE_REFRESH_LOOP", default=True)


settings = Settings()

__all__ = ["settings", "Settings"]
