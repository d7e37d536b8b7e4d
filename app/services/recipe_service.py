# app/services/recipe_service.py
from fastapi import HTTPException, status

from app.core.gemini_client import GeminiClient, RecipeGenerationError
from app.core.storefront import Storefront
from app.schemas.recipe import Recipe


class RecipeService:
    """
    Recipe suggestions from the cart contents.

    Best effort: any failure becomes an HTTP error for this endpoint
    only; cart and checkout state are never touched.
    """

    def __init__(self, client: GeminiClient | None):
        self.client = client

    async def generate(self, storefront: Storefront) -> Recipe:
        """
        Raises:
            HTTPException(503): feature not configured.
            HTTPException(400): empty cart.
            HTTPException(409): a request is already in flight.
            HTTPException(502): the upstream call failed.
        """
        if self.client is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Recipe suggestions are not available",
            )
        with storefront.lock:
            if storefront.cart.is_empty():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Cart is empty",
                )
            if storefront.recipe_pending:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="A recipe is already being generated",
                )

            ingredients = [it.name for it in storefront.cart.items]
            storefront.recipe_pending = True

        try:
            return await self.client.generate_recipe(ingredients)
        except RecipeGenerationError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Could not generate a recipe. Check the API key.",
            ) from e
        finally:
            storefront.recipe_pending = False
