# Shared fixtures: every test gets its own data directory under tmp_path
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Project root on the path so `services`, `shared` and `view_cart` import without installing
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from services.storefront_service.cart_repository import CartRepository  # noqa: E402
from services.storefront_service.catalog_repository import CatalogRepository  # noqa: E402
from services.storefront_service.config import Settings  # noqa: E402
from services.storefront_service.json_store import JsonDocumentStore  # noqa: E402
from services.storefront_service.main import create_app  # noqa: E402


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data", api_prefix="/api", cors_origins="*")


@pytest.fixture
def catalog_repo(settings: Settings) -> CatalogRepository:
    repo = CatalogRepository(JsonDocumentStore(settings.products_path))
    repo.initialize()
    return repo


@pytest.fixture
def cart_repo(settings: Settings, catalog_repo: CatalogRepository) -> CartRepository:
    repo = CartRepository(JsonDocumentStore(settings.cart_path), catalog_repo)
    repo.initialize()
    return repo


@pytest.fixture
def test_client(settings: Settings):
    with TestClient(create_app(settings)) as client:
        yield client
