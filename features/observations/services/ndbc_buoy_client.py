import logging
from typing import List, Optional

from core.config import settings
from features.common.exceptions.upstream_exceptions import UpstreamParseError
from features.common.services.http_client import BaseHttpClient
from features.common.utils.conversions import UnitConversions
from features.observations.models.observation_types import BuoyReading

logger = logging.getLogger(__name__)

NDBC_SOURCE = "ndbc"

# NDBC realtime2 standard meteorological columns
# #YY  MM DD hh mm WDIR WSPD GST  WVHT   DPD   APD MWD   PRES  ATMP  WTMP  DEWP VIS PTDY  TIDE
NDBC_COLUMNS = {
    "WDIR": 5,   # Wind direction (degrees True)
    "WSPD": 6,   # Wind speed (m/s)
    "GST": 7,    # Wind gust (m/s)
    "ATMP": 13,  # Air temperature (Celsius)
}

def _column_value(data: List[str], column: str) -> Optional[float]:
    """Read a numeric column from a data row. 'MM' and short rows mean missing."""
    index = NDBC_COLUMNS[column]
    if index >= len(data) or data[index] == "MM":
        return None
    try:
        return float(data[index])
    except ValueError:
        raise UpstreamParseError(NDBC_SOURCE, f"Invalid {column} value from NDBC: {data[index]!r}")

def parse_ndbc_observation(station_id: str, text: str) -> BuoyReading:
    """Parse the most recent row of an NDBC realtime2 text file.

    Header lines start with '#'. Data rows are whitespace delimited and newest
    first. Wind is converted from m/s to mph and air temperature from Celsius
    to Fahrenheit.
    """
    data_lines = [
        line for line in text.split("\n")
        if line.strip() and not line.startswith("#")
    ]
    if not data_lines:
        raise UpstreamParseError(NDBC_SOURCE, "No data available from NDBC")

    latest = data_lines[0].split()

    return BuoyReading(
        station_id=station_id,
        wind_direction=_column_value(latest, "WDIR"),
        wind_speed=UnitConversions.ms_to_mph(_column_value(latest, "WSPD")),
        wind_gust=UnitConversions.ms_to_mph(_column_value(latest, "GST")),
        air_temp=UnitConversions.celsius_to_fahrenheit(_column_value(latest, "ATMP"))
    )

class NDBCBuoyClient(BaseHttpClient):
    source = NDBC_SOURCE

    async def get_observation(self, station_id: str) -> BuoyReading:
        """Get the latest observation for a buoy or coastal station."""
        url = f"{settings.ndbc_base_url}{station_id}.txt"
        text = await self._get_text(url)
        reading = parse_ndbc_observation(station_id, text)
        logger.debug(f"NDBC {station_id}: wind {reading.wind_speed} mph from {reading.wind_direction}")
        return reading
