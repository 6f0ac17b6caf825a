from fastapi import APIRouter, Depends, Request, Response

from features.common.models.error_types import ErrorResponse
from features.common.routes.cache_headers import apply_cache_headers, error_response
from features.stations.services.station_service import StationService

router = APIRouter(
    prefix="/stations",
    tags=["Stations"],
    responses={
        500: {"model": ErrorResponse, "description": "NWS observations unavailable"}
    }
)

def get_service(request: Request) -> StationService:
    """Dependency to get the StationService instance."""
    return request.app.state.station_service

@router.get(
    "/{station_id}/observations",
    summary="Get NWS station observations",
    description="Returns the recent NWS observation FeatureCollection for the specified station"
)
async def get_station_observations(
    station_id: str,
    response: Response,
    service: StationService = Depends(get_service)
):
    """Get recent NWS observations for a specific station."""
    result = await service.get_station_observations(station_id)
    if not result.ok:
        return error_response(result.errors)

    apply_cache_headers(response, result.cache_hit, service.ttl)
    return result.observations
