"""
Cart Repository Module

This module provides file-based persistence for the shopping cart in the Storefront Service.
It implements the repository pattern to keep cart storage out of the HTTP layer.

Key Features:
    - Whole-document JSON persistence: every operation loads the cart file, applies one
      mutation in memory and writes the complete cart back
    - Atomic writes (temp file + rename) so readers never see a half-written cart
    - One lock around every read-modify-write cycle so concurrent mutations cannot
      lose each other's updates
    - Merge policy: adding a product already in the cart increments its quantity
    - Product snapshot: each line keeps the product as it was when added

Architecture:
    - CartItem: Pydantic model for a line item (schemas.py)
    - JsonDocumentStore: reads and atomically replaces the cart document
    - CatalogRepository: resolves product ids before a line is created
    - CartRepository: the operations below

Data Format (cart.json):
    [
      {
        "id": 1760885331123,
        "productId": 1,
        "product": {"id": 1, "name": "Premium Wireless Headphones", "price": 299.0, ...},
        "quantity": 2,
        "addedAt": "2026-10-19T14:48:51.123000Z"
      }
    ]

Item Ids:
    - Wall-clock milliseconds at creation time
    - Bumped to last issued id + 1 when the clock has not moved past it, so two items
      created in the same millisecond still get distinct ids
    - Issued under the mutation lock

Example Usage:
    ```python
    catalog = CatalogRepository(JsonDocumentStore(Path("data/products.json")))
    catalog.initialize()
    cart_repo = CartRepository(JsonDocumentStore(Path("data/cart.json")), catalog)

    # Add two headphones, then one more (merged into the same line)
    cart = cart_repo.add_item(1, 2)
    cart = cart_repo.add_item(1, 1)
    # cart[0].quantity == 3

    # Replace the quantity
    cart_repo.update_item(cart[0].id, 5)

    # Remove the line by setting quantity to 0
    cart_repo.update_item(cart[0].id, 0)

    # Empty the cart
    cart_repo.clear()
    ```
"""

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Any, List

from pydantic import ValidationError

from services.storefront_service.catalog_repository import CatalogRepository
from services.storefront_service.exceptions import (
    InvalidInputError,
    NotFoundError,
    StorageFailureError,
)
from services.storefront_service.json_store import JsonDocumentStore
from services.storefront_service.schemas import CartItem, CartSummary

logger = logging.getLogger(__name__)


def invalid_input(message: str) -> InvalidInputError:
    """Log a rejected cart input and build the error to raise."""
    logger.warning(f"Rejected cart input: {message}")
    return InvalidInputError(message)


class CartRepository:
    """Repository for the shopping cart persisted as a JSON document."""

    def __init__(self, store: JsonDocumentStore, catalog: CatalogRepository):
        """Initialize cart repository."""
        self.store = store
        self.catalog = catalog
        # Serializes every read-modify-write cycle against the cart document
        self._lock = threading.Lock()
        self._last_item_id = 0

    def initialize(self) -> None:
        """Create an empty cart document if none exists, otherwise check the existing one loads."""
        with self._lock:
            if not self.store.exists():
                self.store.write([])
                logger.info(f"Created empty cart at {self.store.path}")
                return
            cart = self._load()
            logger.info(f"Loaded cart with {len(cart)} items")

    def list_items(self) -> List[CartItem]:
        """Get all cart items in insertion order."""
        return self._load()

    def add_item(self, product_id: Any, quantity: Any = 1) -> List[CartItem]:
        """Add product to cart. Increment quantity if the product is already in the cart."""
        if product_id is None:
            raise invalid_input("Product ID is required")
        product_id = self._require_int(product_id, "productId")
        if product_id < 1:
            raise invalid_input("Product ID is required")
        quantity = self._require_int(quantity, "quantity")
        if quantity < 1:
            raise invalid_input("Quantity must be at least 1")

        try:
            product = self.catalog.get_product(product_id)
        except NotFoundError:
            logger.warning(f"Cannot add unknown product {product_id} to cart")
            raise

        with self._lock:
            cart = self._load()
            existing = next((item for item in cart if item.product_id == product_id), None)

            if existing:
                existing.quantity += quantity
            else:
                cart.append(
                    CartItem(
                        id=self._next_item_id(cart),
                        product_id=product_id,
                        product=product,
                        quantity=quantity,
                        added_at=datetime.now(timezone.utc),
                    )
                )

            self._save(cart)

        logger.info(
            f"Added product {product_id} to cart (quantity {quantity})",
            extra={"operation": "cart.item_added"},
        )
        return cart

    def update_item(self, item_id: Any, quantity: Any) -> List[CartItem]:
        """Replace the quantity of a cart item. If quantity is 0, remove the item."""
        if quantity is None:
            raise invalid_input("Valid quantity is required")
        quantity = self._require_int(quantity, "quantity")
        if quantity < 0:
            raise invalid_input("Valid quantity is required")
        item_id = self._require_int(item_id, "itemId")

        with self._lock:
            cart = self._load()
            index = self._index_of(cart, item_id)

            if quantity == 0:
                del cart[index]
            else:
                cart[index].quantity = quantity

            self._save(cart)

        if quantity == 0:
            logger.info(
                f"Removed cart item {item_id} (quantity set to 0)",
                extra={"operation": "cart.item_removed"},
            )
        else:
            logger.info(
                f"Updated cart item {item_id} quantity to {quantity}",
                extra={"operation": "cart.item_updated"},
            )
        return cart

    def remove_item(self, item_id: Any) -> List[CartItem]:
        """Remove item from cart."""
        item_id = self._require_int(item_id, "itemId")

        with self._lock:
            cart = self._load()
            del cart[self._index_of(cart, item_id)]
            self._save(cart)

        logger.info(f"Removed cart item {item_id}", extra={"operation": "cart.item_removed"})
        return cart

    def clear(self) -> None:
        """Clear the cart."""
        with self._lock:
            self._save([])
        logger.info("Cleared cart", extra={"operation": "cart.cleared"})

    def summarize(self) -> CartSummary:
        """Item count and subtotal computed from the persisted cart."""
        cart = self._load()
        return CartSummary(
            item_count=sum(item.quantity for item in cart),
            subtotal=round(sum(item.product.price * item.quantity for item in cart), 2),
            lines=len(cart),
        )

    def _index_of(self, cart: List[CartItem], item_id: int) -> int:
        for index, item in enumerate(cart):
            if item.id == item_id:
                return index
        logger.warning(f"Cart item {item_id} not found")
        raise NotFoundError(f"Cart item {item_id} not found")

    def _next_item_id(self, cart: List[CartItem]) -> int:
        candidate = time.time_ns() // 1_000_000
        highest = max([self._last_item_id] + [item.id for item in cart])
        if candidate <= highest:
            candidate = highest + 1
        self._last_item_id = candidate
        return candidate

    def _load(self) -> List[CartItem]:
        documents = self.store.read()
        if documents is None:
            return []
        try:
            return [CartItem.model_validate(document) for document in documents]
        except ValidationError as e:
            logger.error(f"Invalid cart document in {self.store.path}: {e}")
            raise StorageFailureError("Cart document is corrupt") from e

    def _save(self, cart: List[CartItem]) -> None:
        self.store.write([item.model_dump(mode="json", by_alias=True) for item in cart])

    @staticmethod
    def _require_int(value: Any, field: str) -> int:
        # bool is an int subclass but never a valid id or quantity
        if isinstance(value, bool):
            raise invalid_input(f"{field} must be an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise invalid_input(f"{field} must be an integer")
