import logging
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from core.config import settings
from features.common.exceptions.upstream_exceptions import UpstreamParseError
from features.common.services.http_client import BaseHttpClient
from features.forecast.models.forecast_types import ForecastPeriod

logger = logging.getLogger(__name__)

NWS_SOURCE = "nws"

class NWSClient(BaseHttpClient):
    """Client for the National Weather Service api.weather.gov endpoints."""

    source = NWS_SOURCE

    def __init__(self):
        super().__init__(headers={
            "User-Agent": settings.nws_user_agent,
            "Accept": "application/geo+json"
        })
        self.base_url = settings.nws_base_url.rstrip("/")

    async def get_station_coordinates(self, station_id: str) -> Tuple[float, float]:
        """Get (latitude, longitude) for an observation station."""
        data = await self._get_json(f"{self.base_url}/stations/{station_id}")
        try:
            lon, lat = data["geometry"]["coordinates"][:2]
            return float(lat), float(lon)
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamParseError(NWS_SOURCE, f"No coordinates for station {station_id}") from e

    async def get_forecast_url(self, lat: float, lon: float) -> str:
        """Resolve the hourly forecast URL for the grid cell containing a point."""
        data = await self._get_json(f"{self.base_url}/points/{lat},{lon}")
        try:
            return data["properties"]["forecastHourly"]
        except (KeyError, TypeError) as e:
            raise UpstreamParseError(NWS_SOURCE, f"No hourly forecast for point {lat},{lon}") from e

    async def get_hourly_forecast(self, forecast_url: str) -> List[ForecastPeriod]:
        """Get the first hourly periods from an NWS gridpoint forecast."""
        data = await self._get_json(forecast_url)
        try:
            periods = data["properties"]["periods"][:settings.forecast_period_limit]
            return [ForecastPeriod.model_validate(period) for period in periods]
        except (KeyError, TypeError, ValidationError) as e:
            raise UpstreamParseError(NWS_SOURCE, "Unexpected hourly forecast payload") from e

    async def get_station_observations(self, station_id: str) -> Dict[str, Any]:
        """Get the raw observation FeatureCollection for a station."""
        data = await self._get_json(f"{self.base_url}/stations/{station_id}/observations")
        if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
            raise UpstreamParseError(NWS_SOURCE, f"Unexpected observations payload for station {station_id}")
        return data
