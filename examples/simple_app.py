from fastapi import FastAPI

from storefront_adapter import AdapterConfig, StorefrontClient, get_storefront_router
from storefront_adapter.config import configure_logging

config = AdapterConfig.from_env()
configure_logging(config)

app = FastAPI()
client = StorefrontClient(config)
app.include_router(get_storefront_router(client))

# Run: uvicorn examples.simple_app:app --reload
