import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.cache import TTLCache, generate_cache_key
from core.config import settings
from features.common.models.error_types import ErrorDetail
from features.common.services.settle import settle_all
from features.common.utils.station_id import sanitize_station_id
from features.observations.models.observation_types import Observation
from features.observations.services.ndbc_buoy_client import NDBC_SOURCE, NDBCBuoyClient
from features.tides.services.tide_service import (
    TIDE_LEVEL_SOURCE,
    TIDE_PREDICTIONS_SOURCE,
    TideService
)

logger = logging.getLogger(__name__)

CACHE_ENDPOINT = "ndbc"

@dataclass
class AggregateResult:
    """Outcome of one /observations aggregation.

    Either ``observation`` is set and ``errors`` is empty, or ``observation``
    is None and ``errors`` lists every feed that failed.
    """
    observation: Optional[Observation] = None
    errors: List[ErrorDetail] = field(default_factory=list)
    cache_hit: bool = False

    @property
    def ok(self) -> bool:
        return self.observation is not None and not self.errors

class ObservationAggregator:
    """Combines the NDBC buoy feed with CO-OPS tide level and predictions."""

    def __init__(
        self,
        cache: TTLCache,
        buoy_client: NDBCBuoyClient,
        tide_service: TideService
    ):
        self.cache = cache
        self.buoy_client = buoy_client
        self.tide_service = tide_service
        self.ttl = settings.get_cache_ttl()[CACHE_ENDPOINT]

    async def aggregate(
        self,
        station: Optional[str] = None,
        tide_station: Optional[str] = None
    ) -> AggregateResult:
        """Fetch buoy weather, current tide and tide predictions for a station pair.

        The three feeds are fetched concurrently and a failure in one never
        stops the others, but the result is all or nothing: if any feed fails
        the caller gets every collected error and nothing is cached.
        """
        weather_station = sanitize_station_id(
            station, settings.default_weather_station, settings.station_id_max_length
        )
        tide_station_id = sanitize_station_id(
            tide_station, settings.default_tide_station, settings.station_id_max_length
        )

        cache_key = generate_cache_key(CACHE_ENDPOINT, {
            "station": weather_station,
            "tideStation": tide_station_id
        })

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {cache_key}")
            return AggregateResult(observation=cached, cache_hit=True)

        outcomes = await settle_all({
            NDBC_SOURCE: self.buoy_client.get_observation(weather_station),
            TIDE_LEVEL_SOURCE: self.tide_service.get_current_tide(tide_station_id),
            TIDE_PREDICTIONS_SOURCE: self.tide_service.get_next_tides(tide_station_id)
        })

        fields: Dict[str, Any] = {}
        errors: List[ErrorDetail] = []

        for outcome in outcomes:
            if not outcome.ok:
                logger.error(
                    f"❌ {outcome.source} fetch failed for {weather_station}/{tide_station_id}: "
                    f"{str(outcome.error)}"
                )
                errors.append(ErrorDetail.from_exception(outcome.error, outcome.source))
                continue

            if outcome.source == NDBC_SOURCE:
                fields.update(outcome.value.model_dump(exclude_none=True))
            elif outcome.source == TIDE_LEVEL_SOURCE:
                fields["current_tide"] = outcome.value
            elif outcome.source == TIDE_PREDICTIONS_SOURCE:
                fields.update(outcome.value.model_dump(exclude_none=True))

        if errors:
            return AggregateResult(errors=errors)

        observation = Observation(**fields)
        self.cache.set(cache_key, observation, self.ttl)
        logger.info(f"✅ Cached observations for {cache_key} ({self.ttl}s)")
        return AggregateResult(observation=observation)
