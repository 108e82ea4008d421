"""Configuration management for the storefront adapter."""

import json
import logging
import os
from pathlib import Path
from typing import Literal, Mapping, Optional
from pydantic import BaseModel, Field, ConfigDict


class BackendConfig(BaseModel):
    """Upstream commerce backend configuration."""
    platform: Literal["bigcommerce", "shopify"] = Field(
        "bigcommerce",
        description="Which upstream schema product entities arrive in"
    )
    storefront_domain: Optional[str] = Field(None, description="Public storefront domain")
    graphql_api_url: str = Field(..., description="Storefront GraphQL endpoint URL")
    rest_api_url: Optional[str] = Field(None, description="Storefront REST API base URL")
    api_token: str = Field(..., description="Storefront API token (sent as a Bearer token)")
    rest_api_token: Optional[str] = Field(
        None,
        description="REST API token (sent as X-Auth-Token); falls back to api_token"
    )
    timeout_seconds: float = Field(30.0, gt=0, description="HTTP timeout for owned clients")


class CacheConfig(BaseModel):
    """Cache hint configuration passed through to the upstream."""
    revalidate_seconds: int = Field(900, gt=0, description="max-age sent with cacheable reads")


class CatalogConfig(BaseModel):
    """Catalog listing configuration."""
    hidden_collection_prefix: str = Field(
        "hidden",
        description="Collections whose handle starts with this token are left out of listings"
    )
    collections_page_size: int = Field(100, gt=0, description="Collections requested per listing")


class TelemetryConfig(BaseModel):
    """OpenTelemetry configuration."""
    console_metrics: bool = Field(False, description="Install a console-exporting meter provider")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field("INFO", description="Root log level")
    filename: Optional[str] = Field(None, description="Log file path (stderr when unset)")


class AdapterConfig(BaseModel):
    """Main configuration for the storefront adapter."""
    backend: BackendConfig
    cache: CacheConfig = Field(default_factory=CacheConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "backend": {
                    "platform": "bigcommerce",
                    "storefront_domain": "store-abc123.mybigcommerce.com",
                    "graphql_api_url": "https://store-abc123.mybigcommerce.com/graphql",
                    "rest_api_url": "https://store-abc123.mybigcommerce.com",
                    "api_token": "eyJ0eXAiOiJKV1Qi...",
                },
                "cache": {"revalidate_seconds": 900},
                "catalog": {"hidden_collection_prefix": "hidden"},
                "logging": {"level": "INFO"},
            }
        }
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AdapterConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Validated adapter configuration
        """
        env = os.environ if environ is None else environ
        backend = {
            "platform": env.get("STOREFRONT_PLATFORM", "bigcommerce"),
            "storefront_domain": env.get("BIGCOMMERCE_STOREFRONT_DOMAIN"),
            "graphql_api_url": env.get("BIGCOMMERCE_STOREFRONT_GRAPHQL_API_URL"),
            "rest_api_url": env.get("BIGCOMMERCE_STOREFRONT_REST_API_URL"),
            "api_token": env.get("BIGCOMMERCE_STOREFRONT_API_TOKEN"),
            "rest_api_token": env.get("BIGCOMMERCE_STOREFRONT_REST_API_TOKEN"),
        }
        return cls(backend=backend)


def load_config(config_path: str) -> AdapterConfig:
    """Load configuration from a JSON file."""
    config_file = Path(config_path)
    with open(config_file) as f:
        config_data = json.load(f)

    return AdapterConfig(**config_data)


def configure_logging(config: AdapterConfig) -> None:
    """Apply the configured log level and destination to the root logger."""
    logging.basicConfig(
        filename=config.logging.filename,
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
