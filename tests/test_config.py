import json

import pytest
from pydantic import ValidationError

from storefront_adapter.config import AdapterConfig, load_config


def test_from_env_reads_backend_settings():
    config = AdapterConfig.from_env({
        "BIGCOMMERCE_STOREFRONT_DOMAIN": "shop.example.com",
        "BIGCOMMERCE_STOREFRONT_GRAPHQL_API_URL": "https://shop.example.com/graphql",
        "BIGCOMMERCE_STOREFRONT_REST_API_URL": "https://shop.example.com",
        "BIGCOMMERCE_STOREFRONT_API_TOKEN": "secret",
    })

    assert config.backend.platform == "bigcommerce"
    assert config.backend.graphql_api_url == "https://shop.example.com/graphql"
    assert config.backend.rest_api_token is None
    assert config.cache.revalidate_seconds == 900
    assert config.catalog.hidden_collection_prefix == "hidden"


def test_from_env_requires_graphql_endpoint():
    with pytest.raises(ValidationError):
        AdapterConfig.from_env({"BIGCOMMERCE_STOREFRONT_API_TOKEN": "secret"})


def test_load_config_from_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "backend": {
            "platform": "shopify",
            "graphql_api_url": "https://shop.example.com/api/graphql.json",
            "api_token": "secret",
        },
        "catalog": {"hidden_collection_prefix": "internal"},
    }))

    config = load_config(str(path))

    assert config.backend.platform == "shopify"
    assert config.catalog.hidden_collection_prefix == "internal"
