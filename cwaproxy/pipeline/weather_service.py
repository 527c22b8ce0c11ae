"""Weather request orchestration: registry, cache, upstream, normalization."""

import logging
from dataclasses import dataclass

from cwaproxy.config import cities
from cwaproxy.config.schema import ProxyConfig
from cwaproxy.ingest.cwa_client import CwaClient
from cwaproxy.ingest.normalizer import normalize
from cwaproxy.models.errors import (
    InvalidLocationCode,
    LocationNotFound,
    MissingCredential,
)
from cwaproxy.models.forecast import NormalizedForecast
from cwaproxy.storage.cache import TTLCache, weather_cache_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherResult:
    forecast: NormalizedForecast
    cached: bool


class WeatherService:
    """Resolves a city code to a normalized forecast, caching the result.

    Concurrent misses for the same city are not de-duplicated; both requests
    fetch and the later write wins.
    """

    def __init__(
        self,
        config: ProxyConfig,
        client: CwaClient | None = None,
        cache: TTLCache | None = None,
    ):
        self.config = config
        self._client = client
        self.cache = cache if cache is not None else TTLCache(config.cache.ttl_seconds)

    def _get_client(self) -> CwaClient:
        if self._client is None:
            upstream = self.config.upstream
            self._client = CwaClient(
                api_key=upstream.api_key,
                base_url=upstream.base_url,
                dataset_id=upstream.dataset_id,
            )
        return self._client

    async def get_city_weather(self, city: str) -> WeatherResult:
        """Return the forecast for a city code.

        Raises InvalidLocationCode, MissingCredential, UpstreamFailure,
        LocationNotFound or MalformedPayload.
        """
        code = cities.normalize_code(city)
        location_name = cities.resolve(code)
        if location_name is None:
            raise InvalidLocationCode(city, cities.city_codes())

        key = weather_cache_key(code)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for %s", code)
            return WeatherResult(forecast=cached, cached=True)

        if not self.config.upstream.api_key:
            logger.error("CWA_API_KEY is not configured")
            raise MissingCredential()

        logger.info("Cache miss for %s, fetching %s from CWA", code, location_name)
        raw = await self._get_client().fetch_forecast(location_name)
        try:
            forecast = normalize(raw)
        except LocationNotFound:
            raise LocationNotFound(location_name) from None

        self.cache.set(key, forecast)
        return WeatherResult(forecast=forecast, cached=False)
