import asyncio
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from core.cache import TTLCache
from features.forecast.models.forecast_types import ForecastPeriod
from features.observations.models.observation_types import BuoyReading
from features.tides.models.tide_types import TideOutlook

NDBC_TEXT = """#YY  MM DD hh mm WDIR WSPD GST  WVHT   DPD   APD MWD   PRES  ATMP  WTMP  DEWP VIS PTDY  TIDE
#yr  mo dy hr mn degT m/s  m/s  m      sec   sec degT  hPa   degC  degC  degC  nmi  hPa   ft
2026 02 11 19 00  180  5.0  7.0  MM     MM    MM  MM   1013.5 10.5  MM    MM   MM   MM    MM
2026 02 11 18 50  190  4.0  6.0  MM     MM    MM  MM   1013.4 10.2  MM    MM   MM   MM    MM
"""

class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

class StubBuoyClient:
    def __init__(self, reading: Optional[BuoyReading] = None, error: Optional[Exception] = None):
        self.reading = reading or BuoyReading(
            station_id="WPOW1",
            wind_speed=11.18,
            wind_direction=180.0,
            wind_gust=15.66,
            air_temp=50.9
        )
        self.error = error
        self.calls: List[str] = []

    async def get_observation(self, station_id: str) -> BuoyReading:
        self.calls.append(station_id)
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        return self.reading.model_copy(update={"station_id": station_id})

    async def close(self):
        pass

class StubTideService:
    def __init__(
        self,
        current: Optional[str] = "8.5",
        outlook: Optional[TideOutlook] = None,
        current_error: Optional[Exception] = None,
        predictions_error: Optional[Exception] = None
    ):
        self.current = current
        self.outlook = outlook or TideOutlook(
            next_tide="2/11/2026 10:30:00 PM 10.2 ft H",
            next_tide_after="2/12/2026 4:15:00 AM 2.5 ft L"
        )
        self.current_error = current_error
        self.predictions_error = predictions_error
        self.current_calls: List[str] = []
        self.prediction_calls: List[str] = []

    async def get_current_tide(self, station_id: str) -> Optional[str]:
        self.current_calls.append(station_id)
        await asyncio.sleep(0)
        if self.current_error:
            raise self.current_error
        return self.current

    async def get_next_tides(self, station_id: str) -> TideOutlook:
        self.prediction_calls.append(station_id)
        await asyncio.sleep(0)
        if self.predictions_error:
            raise self.predictions_error
        return self.outlook

    async def close(self):
        pass

def make_period(
    wind_speed: str,
    temperature: float = 60,
    short_forecast: str = "Partly Cloudy",
    is_daytime: bool = True
) -> ForecastPeriod:
    return ForecastPeriod(
        start_time="2026-02-11T09:00:00-08:00",
        end_time="2026-02-11T10:00:00-08:00",
        wind_speed=wind_speed,
        wind_direction="NW",
        short_forecast=short_forecast,
        temperature=temperature,
        temperature_unit="F",
        is_daytime=is_daytime
    )

class StubNWSClient:
    def __init__(
        self,
        periods: Optional[List[ForecastPeriod]] = None,
        error: Optional[Exception] = None,
        observations: Optional[Dict] = None
    ):
        self.periods = periods if periods is not None else [make_period("15 mph") for _ in range(24)]
        self.error = error
        self.observations = observations or {"type": "FeatureCollection", "features": []}
        self.calls: List[str] = []

    async def get_station_coordinates(self, station_id: str):
        self.calls.append(f"station:{station_id}")
        if self.error:
            raise self.error
        return 47.66, -122.43

    async def get_forecast_url(self, lat: float, lon: float) -> str:
        self.calls.append(f"points:{lat},{lon}")
        return "https://api.weather.gov/gridpoints/SEW/123,68/forecast/hourly"

    async def get_hourly_forecast(self, forecast_url: str) -> List[ForecastPeriod]:
        self.calls.append(f"forecast:{forecast_url}")
        return self.periods

    async def get_station_observations(self, station_id: str) -> Dict:
        self.calls.append(f"observations:{station_id}")
        if self.error:
            raise self.error
        return self.observations

    async def close(self):
        pass

@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(sweep_interval=60, clock=clock)

@pytest.fixture
def app():
    from main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()

@pytest.fixture
def client(app) -> TestClient:
    # No context manager: the lifespan (real NOAA clients) is not started
    return TestClient(app)

@pytest.fixture
def ndbc_text() -> str:
    return NDBC_TEXT

@pytest.fixture
def buoy_client() -> StubBuoyClient:
    return StubBuoyClient()

@pytest.fixture
def tide_service() -> StubTideService:
    return StubTideService()

@pytest.fixture
def nws_client() -> StubNWSClient:
    return StubNWSClient()

@pytest.fixture
def period_factory():
    return make_period
