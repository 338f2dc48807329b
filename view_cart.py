"""Print the persisted cart and its totals straight from the data directory."""

import json
import sys
from typing import Optional

from services.storefront_service.cart_repository import CartRepository
from services.storefront_service.catalog_repository import CatalogRepository
from services.storefront_service.config import Settings
from services.storefront_service.exceptions import StorageFailureError
from services.storefront_service.json_store import JsonDocumentStore


def main(settings: Optional[Settings] = None) -> int:
    settings = settings or Settings()
    catalog_repo = CatalogRepository(JsonDocumentStore(settings.products_path))
    cart_repo = CartRepository(JsonDocumentStore(settings.cart_path), catalog_repo)

    try:
        items = cart_repo.list_items()
        summary = cart_repo.summarize()
    except StorageFailureError as e:
        print(f"❌ Failed to read cart: {e}")
        print(f"Check the document at {settings.cart_path}")
        return 1

    print(f"✅ Found {len(items)} cart lines in {settings.cart_path}:\n")

    if not items:
        print("Cart is empty. Add items via the API first, e.g.:")
        print(f"\ncurl -X POST http://localhost:{settings.storefront_service_port}{settings.api_prefix}/cart \\")
        print('  -H "Content-Type: application/json" \\')
        print("  -d '{\"productId\": 1, \"quantity\": 1}'\n")
        return 0

    for item in items:
        print(f"🛒 Item {item.id}: {item.product.name}")
        print(f"   Quantity: {item.quantity} x {item.product.price:.2f}")
        print(f"   Added: {item.added_at.isoformat()}")
        print(f"   Features: {json.dumps(item.product.features)}")
        print("-" * 50)

    print(f"Items: {summary.item_count}  Subtotal: {summary.subtotal:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
