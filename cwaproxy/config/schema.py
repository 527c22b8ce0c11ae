"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

CWA_API_BASE_URL = "https://opendata.cwa.gov.tw/api"
FORECAST_DATASET_ID = "F-C0032-001"  # 36-hour general forecast


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    environment: str = "development"
    cors_origins: list[str] = ["*"]


class UpstreamConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = CWA_API_BASE_URL
    dataset_id: str = FORECAST_DATASET_ID
    api_key: str = ""


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    ttl_seconds: float = Field(default=600, ge=0)


class ProxyConfig(BaseModel):
    model_config = {"extra": "forbid"}

    server: ServerConfig = ServerConfig()
    upstream: UpstreamConfig = UpstreamConfig()
    cache: CacheConfig = CacheConfig()
