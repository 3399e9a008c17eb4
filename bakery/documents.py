"""Shapes of the raw configuration documents, plus the built-in fallbacks.

The documents arrive as camelCase JSON. Everything here is checked for
presence and type only; whether a step's template or an ingredient actually
exists is the assembly service's problem.
"""

from enum import Enum
from typing import Any, TypeAlias

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from bakery.errors import DocumentValidationError


class DocumentKind(Enum):
    recipes = "recipes"
    step_templates = "step-templates"
    ingredients = "ingredients"


class RawModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AmountRange(RawModel):
    min: float
    max: float
    recommended: float | None = None
    step: float = 1

    @property
    def default(self) -> float:
        if self.recommended is None:
            return (self.min + self.max) / 2
        return self.recommended


class RawIngredientRef(RawModel):
    id: str = Field(min_length=1, validation_alias=AliasChoices("id", "ingredientId"))
    amount: int | float | AmountRange
    description: str | None = None


class RawIngredientGroup(RawModel):
    name: str = Field(min_length=1)
    ingredients: list[RawIngredientRef] = []
    description: str | None = None


class RawStepDefinition(RawModel):
    template: str = Field(min_length=1)
    params: dict[str, Any] = {}
    ingredients: list[RawIngredientRef] = []
    ingredient_groups: list[RawIngredientGroup] = []
    custom_instructions: list[str] | None = None
    estimated_time: int | None = Field(default=None, ge=0)


class RecipeMetadata(RawModel):
    name: str = Field(min_length=1)
    description: str | None = None
    base_servings: int = Field(ge=1, strict=True)
    difficulty: str | None = None
    baking_time: int = Field(default=0, ge=0, strict=True)
    icon: str | None = None
    skill_level: str | None = None
    tags: list[str] | None = None


class RawRecipeDefinition(RawModel):
    id: str = Field(min_length=1)
    metadata: RecipeMetadata
    steps: list[RawStepDefinition]


class StepTemplateDefinition(RawModel):
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    instructions: list[str]
    required_params: list[str] = []
    default_params: dict[str, Any] = {}
    description: str | None = None


class RecipesDocument(RawModel):
    recipes: list[RawRecipeDefinition]


class StepTemplatesDocument(RawModel):
    step_templates: dict[str, StepTemplateDefinition]


class IngredientConversion(RawModel):
    unit: str
    grams_per_unit: float = Field(ge=0)


class IngredientRecord(RawModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    default_unit: str = Field(min_length=1)
    icon: str | None = None
    base_price: float = Field(ge=0)
    description: str | None = None
    category: str | None = None
    conversions: list[IngredientConversion]

    @property
    def unit_weight(self) -> float:
        return next(
            (c.grams_per_unit for c in self.conversions if c.unit == self.default_unit),
            0,
        )


class IngredientsDocument(RawModel):
    ingredients: list[IngredientRecord]


Document: TypeAlias = RecipesDocument | StepTemplatesDocument | IngredientsDocument


SCHEMAS: dict[DocumentKind, type[RawModel]] = {
    DocumentKind.recipes: RecipesDocument,
    DocumentKind.step_templates: StepTemplatesDocument,
    DocumentKind.ingredients: IngredientsDocument,
}


def validate_document(kind: DocumentKind, data: Any) -> Document:
    """Check `data` against the schema for `kind`.

    Raises `DocumentValidationError` naming the first offending field, e.g.
    `recipes.0.metadata.name`.
    """
    try:
        return SCHEMAS[kind].model_validate(data)  # pyright: ignore[reportReturnType]
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "<root>"
        raise DocumentValidationError(kind.value, field, error["msg"]) from e


FALLBACK_RECIPES: dict[str, Any] = {
    "recipes": [
        {
            "id": "basic-cookies",
            "metadata": {
                "name": "Basic Cookies",
                "description": "Simple fallback cookie recipe",
                "baseServings": 12,
                "difficulty": "easy",
                "bakingTime": 20,
                "icon": "🍪",
                "skillLevel": "beginner",
                "tags": ["fallback", "simple"],
            },
            "steps": [
                {
                    "template": "mix-ingredients",
                    "params": {"estimatedTime": 10},
                    "ingredients": [
                        {"id": "flour", "amount": 2},
                        {"id": "sugar", "amount": 10},
                    ],
                },
                {
                    "template": "bake",
                    "params": {"time": 15, "temp": 350},
                },
            ],
        }
    ]
}


FALLBACK_STEP_TEMPLATES: dict[str, Any] = {
    "stepTemplates": {
        "preheat": {
            "name": "Preheat Oven",
            "type": "preparation",
            "instructions": ["Preheat oven to {temp}°F"],
            "requiredParams": ["temp"],
            "defaultParams": {"estimatedTime": 10},
        },
        "bake": {
            "name": "Bake",
            "type": "baking",
            "instructions": ["Bake for {time} minutes at {temp}°F"],
            "requiredParams": ["time", "temp"],
        },
        "mix-ingredients": {
            "name": "Mix Ingredients",
            "type": "preparation",
            "instructions": ["Combine all ingredients", "Mix until well combined"],
            "defaultParams": {"estimatedTime": 5},
        },
    }
}


FALLBACK_INGREDIENTS: dict[str, Any] = {
    "ingredients": [
        {
            "id": "baking-soda",
            "name": "Baking Soda",
            "defaultUnit": "teaspoons",
            "icon": "🧂",
            "basePrice": 0.1,
            "description": "A leavening agent that helps baked goods rise",
            "category": "leavening",
            "conversions": [{"unit": "teaspoons", "gramsPerUnit": 4.8}],
        },
        {
            "id": "nutmeg",
            "name": "Nutmeg",
            "defaultUnit": "teaspoons",
            "icon": "🌰",
            "basePrice": 2.5,
            "description": "A warm, aromatic spice",
            "category": "spice",
            "conversions": [{"unit": "teaspoons", "gramsPerUnit": 2.2}],
        },
        {
            "id": "brown-sugar",
            "name": "Brown Sugar",
            "defaultUnit": "cups",
            "icon": "🟫",
            "basePrice": 0.8,
            "description": "Soft sugar with molasses",
            "category": "sweetener",
            "conversions": [{"unit": "cups", "gramsPerUnit": 220}],
        },
    ]
}


FALLBACKS: dict[DocumentKind, dict[str, Any]] = {
    DocumentKind.recipes: FALLBACK_RECIPES,
    DocumentKind.step_templates: FALLBACK_STEP_TEMPLATES,
    DocumentKind.ingredients: FALLBACK_INGREDIENTS,
}


def fallback_document(kind: DocumentKind) -> Document:
    return validate_document(kind, FALLBACKS[kind])
