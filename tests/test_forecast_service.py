import pytest

from features.common.exceptions.upstream_exceptions import UpstreamParseError, UpstreamTransportError
from features.forecast.services.forecast_service import ForecastService
from features.forecast.services.nws_client import NWSClient
from features.stations.services.station_service import StationService

FORECAST_URL = "https://api.weather.gov/gridpoints/SEW/123,68/forecast/hourly"

@pytest.fixture
def forecast_service(cache, nws_client) -> ForecastService:
    return ForecastService(cache=cache, nws_client=nws_client)

@pytest.mark.anyio
async def test_forecast_runs_the_lookup_chain_in_order(forecast_service, nws_client):
    result = await forecast_service.get_forecast("WPOW1")

    assert result.ok
    assert nws_client.calls == [
        "station:WPOW1",
        "points:47.66,-122.43",
        f"forecast:{FORECAST_URL}",
    ]
    assert result.forecast.station_id == "WPOW1"
    assert result.forecast.latitude == pytest.approx(47.66)
    assert result.forecast.longitude == pytest.approx(-122.43)
    assert len(result.forecast.periods) == 24

@pytest.mark.anyio
async def test_forecast_is_cached_per_station(forecast_service, nws_client):
    await forecast_service.get_forecast("WPOW1")
    cached = await forecast_service.get_forecast("WPOW1")
    await forecast_service.get_forecast("KSEA")

    assert cached.cache_hit
    assert [c for c in nws_client.calls if c.startswith("station:")] == ["station:WPOW1", "station:KSEA"]

@pytest.mark.anyio
async def test_forecast_failure_is_reported_and_not_cached(forecast_service, nws_client, cache):
    nws_client.error = UpstreamTransportError("nws", "HTTP 404 from nws: Not Found")

    result = await forecast_service.get_forecast("NOPE1")

    assert not result.ok
    assert result.errors[0].source == "nws"
    assert result.errors[0].message == "HTTP 404 from nws: Not Found"
    assert cache.size() == 0

@pytest.mark.anyio
async def test_forecast_defaults_bad_station(forecast_service, nws_client):
    await forecast_service.get_forecast("!!!")
    assert nws_client.calls[0] == "station:WPOW1"

@pytest.mark.anyio
async def test_station_observations_passthrough_and_cache(cache, nws_client):
    nws_client.observations = {"type": "FeatureCollection", "features": [{"id": "obs-1"}]}
    service = StationService(cache=cache, nws_client=nws_client)

    first = await service.get_station_observations("KSEA")
    second = await service.get_station_observations("KSEA")

    assert first.observations["features"] == [{"id": "obs-1"}]
    assert not first.cache_hit
    assert second.cache_hit
    assert nws_client.calls == ["observations:KSEA"]

@pytest.mark.anyio
async def test_station_observations_failure(cache, nws_client):
    nws_client.error = UpstreamParseError("nws", "Unexpected observations payload for station KSEA")
    service = StationService(cache=cache, nws_client=nws_client)

    result = await service.get_station_observations("KSEA")

    assert not result.ok
    assert result.errors[0].name == "UpstreamParseError"
    assert cache.size() == 0

def _nws_period(hour):
    return {
        "number": hour + 1,
        "startTime": f"2026-02-11T{hour:02d}:00:00-08:00",
        "endTime": f"2026-02-11T{hour:02d}:59:00-08:00",
        "isDaytime": 6 <= hour < 18,
        "temperature": 48,
        "temperatureUnit": "F",
        "windSpeed": "10 mph",
        "windDirection": "S",
        "shortForecast": "Mostly Cloudy",
    }

@pytest.fixture
def nws():
    """NWSClient with canned api.weather.gov responses keyed by URL."""
    client = NWSClient()
    client.responses = {
        "https://api.weather.gov/stations/WPOW1": {
            "geometry": {"type": "Point", "coordinates": [-122.43, 47.66]}
        },
        "https://api.weather.gov/points/47.66,-122.43": {
            "properties": {"forecastHourly": FORECAST_URL}
        },
        FORECAST_URL: {
            "properties": {"periods": [_nws_period(hour % 24) for hour in range(30)]}
        },
    }

    async def fake_get_json(url, params=None, source=None):
        return client.responses[url]

    client._get_json = fake_get_json
    return client

@pytest.mark.anyio
async def test_nws_client_parses_coordinates_and_periods(nws):
    lat, lon = await nws.get_station_coordinates("WPOW1")
    url = await nws.get_forecast_url(lat, lon)
    periods = await nws.get_hourly_forecast(url)

    assert (lat, lon) == (47.66, -122.43)
    assert url == FORECAST_URL
    assert len(periods) == 24
    assert periods[0].wind_speed == "10 mph"
    assert periods[0].temperature == 48
    assert periods[0].short_forecast == "Mostly Cloudy"

@pytest.mark.anyio
async def test_nws_client_missing_keys_raise_parse_error(nws):
    nws.responses["https://api.weather.gov/stations/WPOW1"] = {"properties": {}}

    with pytest.raises(UpstreamParseError):
        await nws.get_station_coordinates("WPOW1")

@pytest.mark.anyio
async def test_nws_client_rejects_non_feature_collection(nws):
    nws.responses["https://api.weather.gov/stations/KSEA/observations"] = {"type": "Feature"}

    with pytest.raises(UpstreamParseError):
        await nws.get_station_observations("KSEA")
