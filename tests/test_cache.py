import pytest

from core.cache import TTLCache, generate_cache_key

def test_get_returns_value_before_expiry(cache, clock):
    cache.set("ndbc:station=WPOW1", {"windSpeed": 10}, 300)
    clock.advance(299)
    assert cache.get("ndbc:station=WPOW1") == {"windSpeed": 10}

def test_entry_expires_at_ttl(cache, clock):
    cache.set("key", "value", 300)
    clock.advance(300)
    assert cache.get("key") is None
    # Expired reads evict the entry
    assert cache.size() == 0

def test_missing_key_returns_none(cache):
    assert cache.get("nope") is None

def test_set_replaces_and_resets_expiry(cache, clock):
    cache.set("key", "old", 10)
    clock.advance(8)
    cache.set("key", "new", 10)
    clock.advance(8)
    assert cache.get("key") == "new"

def test_delete_and_clear(cache):
    cache.set("a", 1, 60)
    cache.set("b", 2, 60)
    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") is None
    assert cache.size() == 1
    cache.clear()
    assert cache.size() == 0

def test_sweep_removes_only_expired(cache, clock):
    cache.set("short", 1, 10)
    cache.set("long", 2, 100)
    clock.advance(50)
    assert cache.sweep() == 1
    assert cache.size() == 1
    assert cache.get("long") == 2

def test_cache_key_is_order_independent():
    first = generate_cache_key("ndbc", {"station": "WPOW1", "tideStation": "9447130"})
    second = generate_cache_key("ndbc", {"tideStation": "9447130", "station": "WPOW1"})
    assert first == second == "ndbc:station=WPOW1&tideStation=9447130"

def test_cache_key_drops_none_params():
    assert generate_cache_key("forecast", {"station": "WPOW1", "extra": None}) == "forecast:station=WPOW1"

def test_cache_key_distinguishes_endpoints():
    assert generate_cache_key("forecast", {"station": "KSEA"}) != generate_cache_key("observations", {"station": "KSEA"})

@pytest.mark.anyio
async def test_start_and_stop_sweep_scheduler():
    cache = TTLCache(sweep_interval=60)
    assert not cache.running

    cache.start()
    assert cache.running
    scheduler = cache._scheduler
    cache.start()
    assert cache._scheduler is scheduler

    cache.stop()
    assert not cache.running
    cache.stop()

@pytest.mark.anyio
async def test_sweep_job_evicts_expired(cache, clock):
    cache.set("key", "value", 1)
    clock.advance(5)
    await cache._sweep_job()
    assert cache.size() == 0
