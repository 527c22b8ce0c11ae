"""CWA weather proxy: FastAPI app serving city forecasts."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cwaproxy.config import cities
from cwaproxy.config.schema import ProxyConfig
from cwaproxy.models.errors import GENERIC_ERROR, ProxyError
from cwaproxy.pipeline.weather_service import WeatherService

logger = logging.getLogger(__name__)


def create_app(
    config: ProxyConfig | None = None, service: WeatherService | None = None
) -> FastAPI:
    config = config or ProxyConfig()
    service = service or WeatherService(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Server running on port %d (environment: %s)",
            config.server.port, config.server.environment,
        )
        if not config.upstream.api_key:
            logger.warning("CWA_API_KEY is not set; weather requests will fail")
        yield

    app = FastAPI(title="CWA Weather Proxy", version="0.1.0", lifespan=lifespan)
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Wrong method on a known path is unmatched too
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Request error", "message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content=GENERIC_ERROR)

    # ── Endpoints ───────────────────────────────────────────────

    @app.get("/")
    def index():
        """Service description and endpoint directory."""
        return {
            "message": "Welcome to the CWA weather forecast API",
            "endpoints": {
                "weather": "/api/weather/:city",
                "cities": "/api/cities",
                "health": "/api/health",
            },
            "example": "/api/weather/taipei",
        }

    @app.get("/api/health")
    def health():
        return {"status": "OK", "timestamp": _iso_timestamp()}

    @app.get("/api/cities")
    def list_cities():
        return {"success": True, "data": cities.list_cities()}

    @app.get("/api/weather/{city}")
    async def get_city_weather(city: str):
        """36-hour forecast for one city, served from cache when fresh."""
        try:
            result = await service.get_city_weather(city)
        except ProxyError:
            raise
        except Exception:
            logger.exception("Failed to fetch weather data for %s", city)
            return JSONResponse(status_code=500, content=GENERIC_ERROR)
        return {
            "success": True,
            "data": result.forecast.to_dict(),
            "cached": result.cached,
        }

    return app


def _iso_timestamp() -> str:
    """UTC now as e.g. 2026-10-19T08:00:00.123Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
