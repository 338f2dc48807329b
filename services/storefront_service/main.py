"""
storefront_service/main.py - Catalog & Cart Microservice

PURPOSE:
    Serves a read-only product catalog and a single shopping cart, both persisted
    as JSON documents on local disk, to a browser storefront.

RESPONSIBILITIES:
    - Seed the product catalog on first start
    - Add/update/remove cart items and clear the cart
    - Serialize cart mutations so concurrent requests never lose updates
    - Answer every cart mutation with the complete current cart
    - Allow cross-origin calls from the storefront UI

API ENDPOINTS (relative to API_PREFIX, default /api):
    GET    /products                - List all products
    GET    /products/{product_id}   - Get product details
    GET    /cart                    - List cart items
    GET    /cart/summary            - Item count and subtotal
    POST   /cart                    - Add item to cart       {"productId": 1, "quantity": 2}
    PUT    /cart/{item_id}          - Replace item quantity  {"quantity": 5} (0 removes the item)
    DELETE /cart/{item_id}          - Remove item from cart
    DELETE /cart                    - Clear cart
    GET    /health                  - Health check (not prefixed)

STATUS CODES:
    400 - missing or malformed field, unparsable body, negative quantity
    404 - unknown product or cart item
    500 - cart or catalog document could not be read or written

DATA STORAGE:
    - {STOREFRONT_DATA_DIR}/products.json: list of products, written once at seed time
    - {STOREFRONT_DATA_DIR}/cart.json: list of cart items, replaced whole on every mutation

TESTING COMMANDS:
    1. Health Check:
        curl -X GET http://localhost:3001/health

    2. Add Item to Cart (2 headphones):
        curl -X POST http://localhost:3001/api/cart \
          -H "Content-Type: application/json" \
          -d '{"productId": 1, "quantity": 2}'

    3. View Cart Contents:
        curl -X GET http://localhost:3001/api/cart

    4. Update Item Quantity (use the id returned in step 2):
        curl -X PUT http://localhost:3001/api/cart/<item_id> \
          -H "Content-Type: application/json" \
          -d '{"quantity": 5}'

    5. Remove Item:
        curl -X DELETE http://localhost:3001/api/cart/<item_id>

    6. Clear Cart:
        curl -X DELETE http://localhost:3001/api/cart

USAGE:
    python -m services.storefront_service.main
    Runs on port 3001 by default (STOREFRONT_SERVICE_PORT)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status  # Web framework
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.storefront_service import __version__
from services.storefront_service.cart_repository import CartRepository
from services.storefront_service.catalog_repository import CatalogRepository
from services.storefront_service.config import Settings
from services.storefront_service.json_store import JsonDocumentStore
from services.storefront_service.routes import router
from services.storefront_service.schemas import HealthResponse
from shared.logging_config import setup_logging  # Centralized logging

SERVICE_NAME = "storefront-service"

settings = Settings()

# Setup logging
setup_logging(SERVICE_NAME, settings.log_level)
logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app for the given settings (module settings by default)."""
    app_settings = app_settings or settings

    # 1. Initialization phase (before yield): data directory, catalog seed, cart document
    # 2. Cleanup phase (after yield): nothing to release, documents are closed after each operation
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage app lifecycle."""
        logger.info("Starting Storefront Service...")

        try:
            app_settings.data_dir.mkdir(parents=True, exist_ok=True)
            catalog_repo = CatalogRepository(JsonDocumentStore(app_settings.products_path))
            catalog_repo.initialize()
            logger.info("Catalog initialized")
        except Exception as e:
            logger.error(f"Failed to initialize catalog: {e}")
            raise

        try:
            cart_repo = CartRepository(JsonDocumentStore(app_settings.cart_path), catalog_repo)
            cart_repo.initialize()
            logger.info("Cart initialized")
        except Exception as e:
            logger.error(f"Failed to initialize cart: {e}")
            raise

        app.state.catalog_repo = catalog_repo
        app.state.cart_repo = cart_repo

        yield  # ← Application is now ready to handle requests

        logger.info("Shutting down Storefront Service...")

    app = FastAPI(title="Storefront Service", version=__version__, lifespan=lifespan)

    # No session or auth boundary, so any configured origin may call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Unparsable bodies and schema mismatches are client errors (400), not 422
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error for request {request.url}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
        )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            service=SERVICE_NAME,
            version=__version__,
        )

    app.include_router(router, prefix=app_settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.storefront_service_port)
