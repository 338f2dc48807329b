import os
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    data_dir: Path = Path(os.getenv("STOREFRONT_DATA_DIR", "data"))
    products_file: str = os.getenv("PRODUCTS_FILE", "products.json")
    cart_file: str = os.getenv("CART_FILE", "cart.json")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    storefront_service_port: int = int(os.getenv("STOREFRONT_SERVICE_PORT", "3001"))

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def cart_path(self) -> Path:
        return self.data_dir / self.cart_file

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
