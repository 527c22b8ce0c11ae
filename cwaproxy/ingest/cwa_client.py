"""CWA open-data API client for the 36-hour general forecast."""

import logging

import httpx

from cwaproxy.config.schema import CWA_API_BASE_URL, FORECAST_DATASET_ID
from cwaproxy.models.errors import UpstreamFailure

logger = logging.getLogger(__name__)


class CwaClient:
    """Single-request client: no retries, transport default timeout."""

    def __init__(
        self,
        api_key: str,
        base_url: str = CWA_API_BASE_URL,
        dataset_id: str = FORECAST_DATASET_ID,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.dataset_id = dataset_id

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url}/v1/rest/datastore/{self.dataset_id}"

    async def fetch_forecast(self, location_name: str) -> dict:
        """Fetch the raw forecast payload for one location.

        Raises UpstreamFailure on a non-success status. Transport errors
        propagate as httpx.RequestError.
        """
        params = {"Authorization": self.api_key, "locationName": location_name}
        try:
            async with httpx.AsyncClient() as client:
                resp = await client.get(self.forecast_url, params=params)
        except httpx.RequestError as e:
            logger.error("CWA request failed for %s: %s", location_name, e)
            raise

        if resp.is_error:
            body = _response_body(resp)
            logger.error(
                "CWA API %d for %s: %s", resp.status_code, location_name, resp.text[:200]
            )
            raise UpstreamFailure(resp.status_code, body)
        return resp.json()


def _response_body(resp: httpx.Response):
    try:
        return resp.json()
    except ValueError:
        return resp.text
