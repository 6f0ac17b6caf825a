from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, Response

from features.common.models.error_types import ErrorResponse
from features.common.routes.cache_headers import apply_cache_headers, error_response
from features.forecast.models.forecast_types import (
    CurrentConditions,
    ForecastResponse,
    ForecastSummaryResponse
)
from features.forecast.services.forecast_service import ForecastService
from features.forecast.services.summary_service import ForecastSummaryService

router = APIRouter(
    prefix="/forecast",
    tags=["Forecast"],
    responses={
        500: {"model": ErrorResponse, "description": "NWS forecast unavailable"}
    }
)

def get_forecast_service(request: Request) -> ForecastService:
    """Dependency to get the ForecastService instance."""
    return request.app.state.forecast_service

def get_summary_service(request: Request) -> ForecastSummaryService:
    """Dependency to get the ForecastSummaryService instance."""
    return request.app.state.summary_service

@router.get(
    "",
    response_model=ForecastResponse,
    summary="Get hourly forecast for a station",
    description="Returns the next 24 hourly NWS forecast periods for the grid cell containing the station"
)
async def get_forecast(
    response: Response,
    station: Optional[str] = Query(None, description="NWS/NDBC station id, e.g. WPOW1"),
    service: ForecastService = Depends(get_forecast_service)
):
    """Get the hourly forecast for a station."""
    result = await service.get_forecast(station)
    if not result.ok:
        return error_response(result.errors)

    apply_cache_headers(response, result.cache_hit, service.ttl)
    return result.forecast

@router.get(
    "/summary",
    response_model=ForecastSummaryResponse,
    summary="Get a natural-language forecast summary",
    description="Summarizes the hourly wind forecast, optionally relative to the current wind speed"
)
async def get_forecast_summary(
    response: Response,
    station: Optional[str] = Query(None, description="NWS/NDBC station id, e.g. WPOW1"),
    wind_speed: Optional[float] = Query(None, alias="windSpeed", description="Current wind speed in mph"),
    wind_gust: Optional[float] = Query(None, alias="windGust", description="Current wind gust in mph"),
    wind_direction: Optional[float] = Query(None, alias="windDirection", description="Current wind direction in degrees"),
    service: ForecastService = Depends(get_forecast_service),
    summary_service: ForecastSummaryService = Depends(get_summary_service)
):
    """Get a summary of the hourly forecast for a station."""
    result = await service.get_forecast(station)
    if not result.ok:
        return error_response(result.errors)

    current = CurrentConditions(
        wind_speed=wind_speed,
        wind_gust=wind_gust,
        wind_direction=wind_direction
    )
    summary = summary_service.generate_summary(result.forecast.periods, current)

    response.headers["X-Cache"] = "HIT" if result.cache_hit else "MISS"
    return ForecastSummaryResponse(station_id=result.forecast.station_id, summary=summary)
