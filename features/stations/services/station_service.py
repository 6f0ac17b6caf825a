import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.cache import TTLCache, generate_cache_key
from core.config import settings
from features.common.models.error_types import ErrorDetail
from features.common.utils.station_id import sanitize_station_id
from features.forecast.services.nws_client import NWS_SOURCE, NWSClient

logger = logging.getLogger(__name__)

CACHE_ENDPOINT = "observations"

@dataclass
class StationObservationsResult:
    station_id: str
    observations: Optional[Dict[str, Any]] = None
    errors: List[ErrorDetail] = field(default_factory=list)
    cache_hit: bool = False

    @property
    def ok(self) -> bool:
        return self.observations is not None and not self.errors

class StationService:
    def __init__(self, cache: TTLCache, nws_client: NWSClient):
        self.cache = cache
        self.nws_client = nws_client
        self.ttl = settings.get_cache_ttl()[CACHE_ENDPOINT]

    async def get_station_observations(self, station_id: Optional[str]) -> StationObservationsResult:
        """Get recent NWS observations for a station."""
        station = sanitize_station_id(
            station_id, settings.default_nws_station, settings.station_id_max_length
        )
        cache_key = generate_cache_key(CACHE_ENDPOINT, {"station": station})

        cached = self.cache.get(cache_key)
        if cached is not None:
            return StationObservationsResult(station_id=station, observations=cached, cache_hit=True)

        try:
            observations = await self.nws_client.get_station_observations(station)
        except Exception as e:
            logger.error(f"Error getting observations for station {station}: {str(e)}")
            return StationObservationsResult(
                station_id=station,
                errors=[ErrorDetail.from_exception(e, NWS_SOURCE)]
            )

        self.cache.set(cache_key, observations, self.ttl)
        return StationObservationsResult(station_id=station, observations=observations)
