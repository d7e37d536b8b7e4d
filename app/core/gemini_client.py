# app/core/gemini_client.py
import logging
from functools import lru_cache

import httpx

from app.core.config import get_settings
from app.schemas.recipe import Recipe

logger = logging.getLogger(__name__)

# JSON schema the model must answer with (Gemini "responseSchema" dialect)
RECIPE_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "Recipe name"},
        "difficulty": {"type": "STRING", "description": "Easy, Medium or Hard"},
        "time": {"type": "STRING", "description": "Preparation time"},
        "ingredients": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Ingredients with quantities",
        },
        "instructions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Step by step preparation",
        },
        "healthBenefits": {
            "type": "STRING",
            "description": "Short summary of the health benefits",
        },
    },
    "required": ["title", "ingredients", "instructions"],
}


class RecipeGenerationError(RuntimeError):
    """The recipe could not be generated (network, API or response error)."""


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Injected in tests (httpx.MockTransport)
        self.transport = transport

    @staticmethod
    def build_prompt(ingredients: list[str]) -> str:
        names = ", ".join(ingredients)
        return (
            "Create a healthy and creative recipe using some or all of the following "
            f"ingredients from my organic basket: {names}. "
            "You may suggest common pantry staples (salt, olive oil, etc). "
            "Answer strictly in JSON."
        )

    async def generate_recipe(self, ingredients: list[str]) -> Recipe:
        """
        Ask the model for a recipe built from `ingredients`.

        Raises:
            RecipeGenerationError: on transport errors, non-2xx responses
            or a response that does not match the recipe schema.
        """
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [{"parts": [{"text": self.build_prompt(ingredients)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RECIPE_RESPONSE_SCHEMA,
            },
        }
        headers = {"x-goog-api-key": self.api_key}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(url, json=body, headers=headers)
                response.raise_for_status()
            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                logger.error(f"Gemini request error: {e}")
                raise RecipeGenerationError("Recipe service request failed") from e

        try:
            text = response.json()["candidates"][0]["content"]["parts"][0]["text"]
            return Recipe.model_validate_json(text)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Gemini response error: {e}")
            raise RecipeGenerationError("Unexpected recipe response") from e


@lru_cache
def get_gemini_client() -> GeminiClient | None:
    """
    Cached client built from settings.

    Returns None when GEMINI_API_KEY is not configured, meaning the
    recipe feature is unavailable.
    """
    settings = get_settings()
    if not settings.GEMINI_API_KEY:
        return None
    return GeminiClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_API_URL,
        timeout=settings.GEMINI_TIMEOUT_SECONDS,
    )
