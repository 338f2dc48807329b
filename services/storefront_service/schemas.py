from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """Catalog product. Immutable once loaded."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(gt=0)
    name: str
    price: float = Field(ge=0)
    image: str
    description: str
    category: str
    in_stock: bool = Field(alias="inStock")
    rating: float = Field(ge=0.0, le=5.0)
    features: List[str] = Field(default_factory=list)


class CartItem(BaseModel):
    """Cart line item holding a snapshot of the product taken when it was added."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    product_id: int = Field(alias="productId")
    product: Product
    quantity: int = Field(ge=1)
    added_at: datetime = Field(alias="addedAt")


def ensure_not_bool(value: Any) -> Any:
    # JSON true/false would otherwise coerce to 1/0
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    return value


class AddToCartRequest(BaseModel):
    """Request model for adding item to cart."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId")
    quantity: int = 1

    @field_validator("product_id", "quantity", mode="before")
    @classmethod
    def reject_bool_values(cls, value: Any) -> Any:
        return ensure_not_bool(value)


class UpdateQuantityRequest(BaseModel):
    """Request model for updating item quantity."""

    quantity: int

    @field_validator("quantity", mode="before")
    @classmethod
    def reject_bool_values(cls, value: Any) -> Any:
        return ensure_not_bool(value)


class CartMutationResponse(BaseModel):
    """Response model for a cart mutation: message plus the complete current cart."""

    message: str
    cart: List[CartItem]


class MessageResponse(BaseModel):
    message: str


class CartSummary(BaseModel):
    """Aggregates derived from the persisted cart."""

    model_config = ConfigDict(populate_by_name=True)

    item_count: int = Field(alias="itemCount")
    subtotal: float
    lines: int


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
