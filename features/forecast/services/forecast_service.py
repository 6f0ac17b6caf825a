import logging
from dataclasses import dataclass, field
from typing import List, Optional

from core.cache import TTLCache, generate_cache_key
from core.config import settings
from features.common.models.error_types import ErrorDetail
from features.common.utils.station_id import sanitize_station_id
from features.forecast.models.forecast_types import ForecastResponse
from features.forecast.services.nws_client import NWS_SOURCE, NWSClient

logger = logging.getLogger(__name__)

CACHE_ENDPOINT = "forecast"

@dataclass
class ForecastResult:
    forecast: Optional[ForecastResponse] = None
    errors: List[ErrorDetail] = field(default_factory=list)
    cache_hit: bool = False

    @property
    def ok(self) -> bool:
        return self.forecast is not None and not self.errors

class ForecastService:
    def __init__(self, cache: TTLCache, nws_client: NWSClient):
        self.cache = cache
        self.nws_client = nws_client
        self.ttl = settings.get_cache_ttl()[CACHE_ENDPOINT]

    async def get_forecast(self, station: Optional[str] = None) -> ForecastResult:
        """Get the hourly forecast for the grid cell around a station.

        Resolution is a fixed chain: station -> coordinates -> hourly forecast
        URL -> periods. Each hop needs the previous one so they run in order.
        """
        station_id = sanitize_station_id(
            station, settings.default_weather_station, settings.station_id_max_length
        )
        cache_key = generate_cache_key(CACHE_ENDPOINT, {"station": station_id})

        cached = self.cache.get(cache_key)
        if cached is not None:
            return ForecastResult(forecast=cached, cache_hit=True)

        try:
            lat, lon = await self.nws_client.get_station_coordinates(station_id)
            forecast_url = await self.nws_client.get_forecast_url(lat, lon)
            periods = await self.nws_client.get_hourly_forecast(forecast_url)
        except Exception as e:
            logger.error(f"❌ Error getting forecast for station {station_id}: {str(e)}")
            return ForecastResult(errors=[ErrorDetail.from_exception(e, NWS_SOURCE)])

        forecast = ForecastResponse(
            station_id=station_id,
            latitude=lat,
            longitude=lon,
            periods=periods
        )
        self.cache.set(cache_key, forecast, self.ttl)
        logger.info(f"✅ Cached {len(periods)} forecast periods for {station_id} ({self.ttl}s)")
        return ForecastResult(forecast=forecast)
