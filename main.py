from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from core.cache import TTLCache
from core.config import settings
from core.logging_config import setup_logging

# Feature routes
from features.observations.routes.observation_routes import router as observation_router
from features.forecast.routes.forecast_routes import router as forecast_router
from features.stations.routes.station_routes import router as station_router

# Services and clients
from features.observations.services.ndbc_buoy_client import NDBCBuoyClient
from features.observations.services.observation_aggregator import ObservationAggregator
from features.tides.services.tide_service import TideService
from features.forecast.services.nws_client import NWSClient
from features.forecast.services.forecast_service import ForecastService
from features.forecast.services.summary_service import ForecastSummaryService
from features.stations.services.station_service import StationService

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("🚀 Starting West Point Wind API...")

    cache = TTLCache(sweep_interval=settings.cache["sweep_interval"])
    if settings.cache["enabled"]:
        cache.start()

    buoy_client = NDBCBuoyClient()
    tide_service = TideService()
    nws_client = NWSClient()

    # Store services in app state
    app.state.cache = cache
    app.state.observation_aggregator = ObservationAggregator(
        cache=cache,
        buoy_client=buoy_client,
        tide_service=tide_service
    )
    app.state.forecast_service = ForecastService(cache=cache, nws_client=nws_client)
    app.state.summary_service = ForecastSummaryService()
    app.state.station_service = StationService(cache=cache, nws_client=nws_client)

    logger.info("✨ API startup complete - ready to serve requests")
    try:
        yield
    finally:
        logger.info("🔄 Shutting down API...")
        cache.stop()
        for client in (buoy_client, tide_service, nws_client):
            await client.close()
        logger.info("👋 API shutdown complete")

app = FastAPI(
    title="West Point Wind API",
    description="Marine wind, tide and forecast data for NOAA stations",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=settings.cors_allowed_headers,
)

# Include feature routers
app.include_router(observation_router)
app.include_router(forecast_router)
app.include_router(station_router)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "time": datetime.now().isoformat()
    }

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5010))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        log_level="info",
        workers=1
    )
