# app/routers/cart.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.gemini_client import get_gemini_client
from app.core.storefront import Storefront, get_storefront
from app.database import get_session
from app.repositories.record_repo import RecordRepository
from app.schemas.cart import CartItemAdd, CartSummary
from app.schemas.recipe import Recipe
from app.services.cart_service import CartService
from app.services.product_service import ProductService
from app.services.recipe_service import RecipeService

router = APIRouter(prefix="/cart", tags=["Cart"])

product_service = ProductService(RecordRepository())
service = CartService(product_service)


def get_recipe_service() -> RecipeService:
    return RecipeService(get_gemini_client())


@router.get("", response_model=CartSummary)
def get_cart(storefront: Storefront = Depends(get_storefront)):
    """
    Get the cart summary.
    """
    return service.get_cart_summary(storefront.cart)


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemAdd,
    session: Session = Depends(get_session),
    storefront: Storefront = Depends(get_storefront),
):
    """
    Add one unit of a product to the cart.

    Returns the updated cart summary.
    """
    return service.add_to_cart(session, storefront, payload.product_id)


@router.delete("/{product_id}", response_model=CartSummary)
def remove_cart_item(
    product_id: str,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Remove a product line from the cart.

    Returns the updated cart summary.
    """
    return service.remove_item(storefront, product_id)


@router.delete("", response_model=CartSummary)
def clear_cart(storefront: Storefront = Depends(get_storefront)):
    """
    Clear the entire cart.

    Returns an empty cart summary.
    """
    return service.clear_cart(storefront)


@router.post("/recipe", response_model=Recipe)
async def suggest_recipe(
    storefront: Storefront = Depends(get_storefront),
    recipe_service: RecipeService = Depends(get_recipe_service),
):
    """
    Suggest a recipe from the cart contents.

    503 when the feature is not configured, 409 while another
    suggestion is being generated.
    """
    return await recipe_service.generate(storefront)
