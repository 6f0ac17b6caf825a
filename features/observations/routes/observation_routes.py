from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, Response

from features.common.models.error_types import ErrorResponse
from features.common.routes.cache_headers import apply_cache_headers, error_response
from features.observations.models.observation_types import Observation
from features.observations.services.observation_aggregator import ObservationAggregator

router = APIRouter(
    prefix="/observations",
    tags=["Observations"],
    responses={
        500: {"model": ErrorResponse, "description": "One or more NOAA feeds failed"}
    }
)

def get_aggregator(request: Request) -> ObservationAggregator:
    """Dependency to get the ObservationAggregator instance."""
    return request.app.state.observation_aggregator

@router.get(
    "",
    response_model=Observation,
    response_model_exclude_none=True,
    summary="Get current buoy and tide conditions",
    description="Returns the latest NDBC wind and air temperature merged with the current CO-OPS water level and the next two predicted tides"
)
async def get_observations(
    response: Response,
    station: Optional[str] = Query(None, description="NDBC station id, e.g. WPOW1"),
    tide_station: Optional[str] = Query(None, alias="tideStation", description="CO-OPS tide station id, e.g. 9447130"),
    aggregator: ObservationAggregator = Depends(get_aggregator)
):
    """Get merged buoy and tide observations for a station pair."""
    result = await aggregator.aggregate(station, tide_station)
    if not result.ok:
        return error_response(result.errors)

    apply_cache_headers(response, result.cache_hit, aggregator.ttl)
    return result.observation
