import logging
import threading
from typing import List, Optional

from pydantic import ValidationError

from services.storefront_service.exceptions import NotFoundError, StorageFailureError
from services.storefront_service.json_store import JsonDocumentStore
from services.storefront_service.schemas import Product
from services.storefront_service.seed_data import seed_products

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Read-only product catalog backed by a JSON document.

    The catalog does not change while the service runs, so it is loaded once
    and served from memory afterwards.
    """

    def __init__(self, store: JsonDocumentStore):
        """Initialize with the products document store."""
        self.store = store
        self._products: Optional[List[Product]] = None
        self._lock = threading.Lock()

    def initialize(self) -> List[Product]:
        """Load the persisted catalog, seeding it first if it does not exist yet.

        Safe to call on every start: an existing catalog is never rewritten.
        """
        with self._lock:
            documents = self.store.read()
            if documents is None:
                products = seed_products(self.store)
            else:
                products = self._parse(documents)
                logger.info(f"Loaded {len(products)} products from {self.store.path.name}")
            self._products = products
            return list(products)

    def list_products(self) -> List[Product]:
        """Return the full catalog in storage order."""
        return list(self._loaded())

    def get_product(self, product_id: int) -> Product:
        """Get product by ID. Raises NotFoundError if absent."""
        for product in self._loaded():
            if product.id == product_id:
                return product
        raise NotFoundError(f"Product {product_id} not found")

    def _loaded(self) -> List[Product]:
        if self._products is None:
            self.initialize()
        return self._products

    def _parse(self, documents) -> List[Product]:
        try:
            products = [Product.model_validate(document) for document in documents]
        except ValidationError as e:
            logger.error(f"Invalid product document in {self.store.path}: {e}")
            raise StorageFailureError("Products document is corrupt") from e

        ids = [product.id for product in products]
        if len(ids) != len(set(ids)):
            logger.error(f"Duplicate product ids in {self.store.path}")
            raise StorageFailureError("Products document has duplicate ids")

        return products
