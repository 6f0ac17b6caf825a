from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class ForecastPeriod(BaseModel):
    """One hourly NWS forecast period, passed through in NWS units."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_time: str
    end_time: str
    wind_speed: str = Field(..., description='Free text such as "10 mph" or "10-15 mph"')
    wind_direction: str = Field(..., description="Compass direction, e.g. NW")
    short_forecast: str
    temperature: Union[int, float]
    temperature_unit: str
    is_daytime: bool

class ForecastResponse(BaseModel):
    """Hourly forecast for the grid cell containing a station."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    station_id: str
    latitude: float
    longitude: float
    periods: List[ForecastPeriod]

class CurrentConditions(BaseModel):
    """Current wind used to temper the forecast summary."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    wind_speed: Optional[float] = None  # mph
    wind_gust: Optional[float] = None  # mph
    wind_direction: Optional[float] = None  # degrees

class ForecastSummaryResponse(BaseModel):
    """Natural-language summary of a station's hourly forecast."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    station_id: str
    summary: str
