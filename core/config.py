from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List, Any

class Settings(BaseSettings):
    """Application settings."""

    # NDBC realtime2 text feed
    ndbc_base_url: str = "https://www.ndbc.noaa.gov/data/realtime2/"

    # CO-OPS tides and currents
    coops_base_url: str = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"
    coops_application: str = "westpointwinddotcom"
    coops_params: Dict = {
        "datum": "MLLW",
        "units": "english",
        "time_zone": "lst_ldt",
        "format": "json"
    }

    # NWS api.weather.gov
    nws_base_url: str = "https://api.weather.gov"
    nws_user_agent: str = "NextWeather/1.0 (westpointwind.com)"

    # Station defaults used when the caller's id is missing or unusable
    default_weather_station: str = "WPOW1"
    default_tide_station: str = "9447130"
    default_nws_station: str = "KSEA"
    station_id_max_length: int = 10

    # Hourly periods kept from the NWS forecast
    forecast_period_limit: int = 24

    cache: Dict[str, Any] = {
        "enabled": True,
        "sweep_interval": 60  # seconds between expired-entry sweeps
    }

    request: Dict = {
        "timeout": 30
    }

    cors_allowed_headers: List[str] = [
        "Origin",
        "X-Requested-With",
        "Content-Type",
        "Accept"
    ]

    # Logging
    log_level: str = "INFO"
    log_tz_offset_hours: int = -8
    log_tz_name: str = "PST"

    def get_cache_ttl(self) -> Dict[str, int]:
        """Get cache TTL values in seconds, keyed by endpoint."""
        return {
            "ndbc": 300,          # 5 minutes - buoy and tide levels update frequently
            "forecast": 1800,     # 30 minutes - NWS hourly grids change slowly
            "observations": 300   # 5 minutes - NWS station observations
        }

    model_config = SettingsConfigDict(
        env_prefix="wpw_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
