import logging
from datetime import date, timedelta
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from core.config import settings
from features.common.exceptions.upstream_exceptions import UpstreamParseError
from features.common.services.http_client import BaseHttpClient
from features.common.utils.conversions import format_tide_time
from features.tides.models.tide_types import (
    UNAVAILABLE,
    TideLevelResponse,
    TideOutlook,
    TidePrediction,
    TidePredictionsResponse
)

logger = logging.getLogger(__name__)

TIDE_LEVEL_SOURCE = "tide_level"
TIDE_PREDICTIONS_SOURCE = "tide_predictions"

def prediction_window(today: date) -> Tuple[str, str]:
    """Begin and end dates (YYYYMMDD) covering today and tomorrow."""
    tomorrow = today + timedelta(days=1)
    return today.strftime("%Y%m%d"), tomorrow.strftime("%Y%m%d")

def _error_message(data: Dict[str, Any]) -> str:
    error = data.get("error")
    if isinstance(error, dict):
        return error.get("message", "")
    return str(error or "")

def format_prediction(prediction: TidePrediction) -> str:
    return f"{format_tide_time(prediction.t)} {prediction.v} ft {prediction.type}"

class TideService(BaseHttpClient):
    """Service for interacting with the NOAA CO-OPS tide data API."""

    source = "coops"

    def _base_params(self, station_id: str) -> Dict[str, Any]:
        return {
            **settings.coops_params,
            "station": station_id,
            "application": settings.coops_application
        }

    async def get_current_tide(self, station_id: str) -> Optional[str]:
        """Get the latest water level reading for a tide station, in feet."""
        params = {
            **self._base_params(station_id),
            "product": "water_level",
            "date": "latest"
        }
        data = await self._fetch(TIDE_LEVEL_SOURCE, params)

        if "error" in data:
            raise UpstreamParseError(TIDE_LEVEL_SOURCE, _error_message(data) or "Unknown error from NOAA API")

        try:
            levels = TideLevelResponse.model_validate(data)
        except ValidationError as e:
            raise UpstreamParseError(TIDE_LEVEL_SOURCE, f"Unexpected water level payload: {e.error_count()} errors") from e

        if not levels.data:
            logger.info(f"No water level readings for tide station {station_id}")
            return None

        return levels.data[-1].v

    async def get_next_tides(self, station_id: str, today: Optional[date] = None) -> TideOutlook:
        """Get the next two predicted high/low tides for a station."""
        begin_date, end_date = prediction_window(today or date.today())
        params = {
            **self._base_params(station_id),
            "product": "predictions",
            "begin_date": begin_date,
            "end_date": end_date,
            "interval": "hilo"
        }
        data = await self._fetch(TIDE_PREDICTIONS_SOURCE, params)

        if "error" in data:
            message = _error_message(data)
            if "No Predictions data was found" in message:
                # Stations without harmonic constituents have no predictions
                return TideOutlook()
            raise UpstreamParseError(TIDE_PREDICTIONS_SOURCE, message or "Unknown error from NOAA API")

        try:
            predictions = TidePredictionsResponse.model_validate(data).predictions
        except ValidationError as e:
            raise UpstreamParseError(TIDE_PREDICTIONS_SOURCE, f"Unexpected predictions payload: {e.error_count()} errors") from e

        if not predictions:
            return TideOutlook()

        return TideOutlook(
            next_tide=format_prediction(predictions[0]),
            next_tide_after=format_prediction(predictions[1]) if len(predictions) > 1 else UNAVAILABLE
        )

    async def _fetch(self, source: str, params: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._get_json(settings.coops_base_url, params=params, source=source)
        if not isinstance(data, dict):
            raise UpstreamParseError(source, "Unexpected response from NOAA CO-OPS")
        return data
