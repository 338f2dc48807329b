from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from services.storefront_service.cart_repository import CartRepository
from services.storefront_service.catalog_repository import CatalogRepository
from services.storefront_service.exceptions import (
    InvalidInputError,
    NotFoundError,
    StorefrontError,
)
from services.storefront_service.schemas import (
    AddToCartRequest,
    CartItem,
    CartMutationResponse,
    CartSummary,
    MessageResponse,
    Product,
    UpdateQuantityRequest,
)

router = APIRouter()


# Repositories are built in the app lifespan and kept on app.state
def get_catalog_repository(request: Request) -> CatalogRepository:
    return request.app.state.catalog_repo


def get_cart_repository(request: Request) -> CartRepository:
    return request.app.state.cart_repo


def to_http_exception(error: StorefrontError) -> HTTPException:
    """Translate a store outcome into the matching HTTP error."""
    if isinstance(error, InvalidInputError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    # StorageFailureError and anything unclassified
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))


@router.get("/products", response_model=List[Product], tags=["catalog"])
def list_products(catalog_repo: CatalogRepository = Depends(get_catalog_repository)) -> List[Product]:
    """List all products."""
    try:
        return catalog_repo.list_products()
    except StorefrontError as e:
        raise to_http_exception(e) from e


@router.get("/products/{product_id}", response_model=Product, tags=["catalog"])
def get_product(product_id: int, catalog_repo: CatalogRepository = Depends(get_catalog_repository)) -> Product:
    """Get product details."""
    try:
        return catalog_repo.get_product(product_id)
    except StorefrontError as e:
        raise to_http_exception(e) from e


@router.get("/cart", response_model=List[CartItem], tags=["cart"])
def get_cart(cart_repo: CartRepository = Depends(get_cart_repository)) -> List[CartItem]:
    """Get cart items."""
    try:
        return cart_repo.list_items()
    except StorefrontError as e:
        raise to_http_exception(e) from e


@router.get("/cart/summary", response_model=CartSummary, tags=["cart"])
def get_cart_summary(cart_repo: CartRepository = Depends(get_cart_repository)) -> CartSummary:
    """Item count and subtotal of the current cart."""
    try:
        return cart_repo.summarize()
    except StorefrontError as e:
        raise to_http_exception(e) from e


# Every mutation answers with the complete cart so the client can replace its cache wholesale
@router.post("/cart", response_model=CartMutationResponse, tags=["cart"])
def add_item(
    request: AddToCartRequest, cart_repo: CartRepository = Depends(get_cart_repository)
) -> CartMutationResponse:
    """Add item to cart."""
    try:
        cart = cart_repo.add_item(request.product_id, request.quantity)
    except StorefrontError as e:
        raise to_http_exception(e) from e
    return CartMutationResponse(message="Item added to cart", cart=cart)


@router.put("/cart/{item_id}", response_model=CartMutationResponse, tags=["cart"])
def update_item(
    item_id: int, request: UpdateQuantityRequest, cart_repo: CartRepository = Depends(get_cart_repository)
) -> CartMutationResponse:
    """Update cart item quantity. If quantity is 0, remove the item."""
    try:
        cart = cart_repo.update_item(item_id, request.quantity)
    except StorefrontError as e:
        raise to_http_exception(e) from e
    return CartMutationResponse(message="Cart updated", cart=cart)


@router.delete("/cart/{item_id}", response_model=CartMutationResponse, tags=["cart"])
def remove_item(item_id: int, cart_repo: CartRepository = Depends(get_cart_repository)) -> CartMutationResponse:
    """Remove item from cart."""
    try:
        cart = cart_repo.remove_item(item_id)
    except StorefrontError as e:
        raise to_http_exception(e) from e
    return CartMutationResponse(message="Item removed from cart", cart=cart)


@router.delete("/cart", response_model=MessageResponse, tags=["cart"])
def clear_cart(cart_repo: CartRepository = Depends(get_cart_repository)) -> MessageResponse:
    """Clear cart."""
    try:
        cart_repo.clear()
    except StorefrontError as e:
        raise to_http_exception(e) from e
    return MessageResponse(message="Cart cleared")
