# app/schemas/recipe.py
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    """
    Recipe suggestion returned by the generative model.

    The model answers in camelCase (healthBenefits); both spellings
    are accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    difficulty: str = ""
    time: str = ""
    ingredients: list[str] = []
    instructions: list[str] = []
    health_benefits: str = Field(
        default="",
        validation_alias=AliasChoices("health_benefits", "healthBenefits"),
    )
