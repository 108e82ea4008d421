"""Example usage of the storefront adapter."""

import asyncio
import json
from storefront_adapter import StorefrontClient, AdapterConfig


async def main():
    """Example: Fetch catalog data in the unified format."""

    # Load configuration
    with open('config.json') as f:
        config_data = json.load(f)

    config = AdapterConfig(**config_data)

    async with StorefrontClient(config) as client:
        print("Fetching product...")
        product = await client.get_product("mock-t-shirt")
        if product is None:
            print("Product not found")
            return

        print(json.dumps(product.model_dump(mode='json', by_alias=True), indent=2))

        print("\n\nCollections:")
        for collection in await client.get_collections():
            print(f"- {collection.title} ({collection.path})")

        print("\nMenu:")
        for item in await client.get_menu():
            print(f"- {item.title}: {item.path}")


if __name__ == "__main__":
    asyncio.run(main())
