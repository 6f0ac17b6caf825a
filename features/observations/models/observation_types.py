from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class BuoyReading(BaseModel):
    """Latest NDBC buoy reading, converted to mph and Fahrenheit."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    station_id: str
    wind_speed: Optional[float] = None  # mph
    wind_direction: Optional[float] = None  # degrees clockwise from true N
    wind_gust: Optional[float] = None  # mph
    air_temp: Optional[float] = None  # Fahrenheit

class Observation(BaseModel):
    """Merged buoy and tide record served by /observations.

    Every field except station_id comes from a separate feed and is left out
    of the response when that feed has no value for it.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    station_id: str = Field(..., description="NDBC station identifier")
    wind_speed: Optional[float] = Field(None, description="Wind speed in mph")
    wind_direction: Optional[float] = Field(None, description="Wind direction in degrees")
    wind_gust: Optional[float] = Field(None, description="Wind gust in mph")
    air_temp: Optional[float] = Field(None, description="Air temperature in Fahrenheit")
    current_tide: Optional[str] = Field(None, description="Latest water level in feet")
    next_tide: Optional[str] = Field(None, description="Next predicted high/low tide")
    next_tide_after: Optional[str] = Field(None, description="Following high/low tide or 'Unavailable'")
