"""Assembly of recipes from the loaded documents.

A recipe either resolves completely or is left out: a step pointing at a
template that doesn't exist, or missing one of the template's required
parameters, drops the whole recipe. Ingredients are looser. One the catalog
doesn't know is skipped and the step carries on without it, but one it does
know with a broken amount range drops the recipe.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from bakery import templates
from bakery.catalog import IngredientCatalog
from bakery.documents import (
    RawIngredientGroup,
    RawIngredientRef,
    RawRecipeDefinition,
    RawStepDefinition,
    StepTemplateDefinition,
)
from bakery.errors import (
    InvalidIngredientAmount,
    MissingRequiredParams,
    RecipeAssemblyError,
    TemplateNotFound,
)
from bakery.loader import ConfigLoader
from bakery.models import (
    Difficulty,
    IngredientAmount,
    IngredientGroup,
    Recipe,
    Step,
)


logger = logging.getLogger(__name__)


def as_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def as_difficulty(value: str | None) -> Difficulty:
    if value is None:
        return Difficulty.easy
    try:
        return Difficulty(value.lower())
    except ValueError:
        logger.warning("Unknown difficulty '%s', using easy", value)
        return Difficulty.easy


class RecipeService:
    def __init__(self, *, loader: ConfigLoader, catalog: IngredientCatalog) -> None:
        self.loader = loader
        self.catalog = catalog
        self._recipes: dict[str, Recipe] = {}
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Load and assemble every recipe. Does nothing the second time."""
        if self._initialized:
            return

        async with self._lock:
            if self._initialized:
                return

            document = await self.loader.load_recipes()
            logger.info("Assembling %d recipes", len(document.recipes))
            for definition in document.recipes:
                try:
                    recipe = await self.create_recipe_from_definition(definition)
                except RecipeAssemblyError as e:
                    logger.error("Skipping recipe %s", e)
                    continue
                self._recipes[recipe.id] = recipe

            self._initialized = True
            logger.info("Initialized with %d recipes", len(self._recipes))

    async def reload(self) -> None:
        logger.info("Reloading recipes")
        self._recipes.clear()
        self._initialized = False
        self.loader.clear_cache()
        await self.initialize()

    async def get_all_recipes(self) -> list[Recipe]:
        await self.initialize()
        return list(self._recipes.values())

    async def get_recipe(self, id: str) -> Recipe | None:
        await self.initialize()
        return self._recipes.get(id)

    async def get_recipes_by_difficulty(self, difficulty: Difficulty | str) -> list[Recipe]:
        if isinstance(difficulty, str):
            try:
                difficulty = Difficulty(difficulty.lower())
            except ValueError:
                return []
        return [r for r in await self.get_all_recipes() if r.difficulty == difficulty]

    async def get_recipes_by_tag(self, tag: str) -> list[Recipe]:
        return [r for r in await self.get_all_recipes() if tag in r.tags]

    async def has_recipe(self, id: str) -> bool:
        await self.initialize()
        return id in self._recipes

    async def get_recipe_ids(self) -> list[str]:
        await self.initialize()
        return list(self._recipes)

    def summary(self) -> dict[str, Any]:
        return {
            "initialized": self._initialized,
            "recipe_count": len(self._recipes),
            "recipe_ids": list(self._recipes),
        }

    async def create_recipe_from_definition(self, definition: RawRecipeDefinition) -> Recipe:
        """Assemble one recipe. Raises `RecipeAssemblyError` if it can't be."""
        steps = [
            await self._create_step(definition.id, step, order)
            for order, step in enumerate(definition.steps, 1)
        ]
        metadata = definition.metadata
        return Recipe(
            id=definition.id,
            name=metadata.name,
            description=metadata.description or "",
            icon=metadata.icon or "",
            base_servings=metadata.base_servings,
            difficulty=as_difficulty(metadata.difficulty),
            baking_time=metadata.baking_time,
            steps=steps,
            tags=metadata.tags or (),
            skill_level=metadata.skill_level,
        )

    async def _get_template(self, template_id: str) -> StepTemplateDefinition | None:
        # Only fetched once a step actually needs it.
        document = await self.loader.load_step_templates()
        return document.step_templates.get(template_id)

    async def _create_step(
        self,
        recipe_id: str,
        definition: RawStepDefinition,
        order: int,
    ) -> Step:
        template = await self._get_template(definition.template)
        if template is None:
            raise TemplateNotFound(recipe_id, definition.template)

        params = templates.merge_params(template.default_params, definition.params)
        missing = templates.missing_params(template.required_params, params)
        if missing:
            raise MissingRequiredParams(recipe_id, definition.template, missing)

        groups = [
            group
            for group in (
                self._resolve_group(recipe_id, g) for g in definition.ingredient_groups
            )
            if group is not None
        ]
        instructions = definition.custom_instructions
        if instructions is None:
            instructions = template.instructions
        estimated_time = definition.estimated_time
        if estimated_time is None:
            estimated_time = as_number(params.get("estimatedTime"))

        return Step(
            id=f"{definition.template}-{order}",
            order=order,
            name=templates.resolve_name(template.name, params),
            type=template.type,
            instructions=instructions,
            parameters=params,
            description=template.description or f"Step using {definition.template} template",
            estimated_time=estimated_time,
            temperature=as_number(params.get("temp")),
            ingredients=self._resolve_ingredients(recipe_id, definition.ingredients),
            groups=groups,
        )

    def _resolve_ingredients(
        self,
        recipe_id: str,
        refs: Sequence[RawIngredientRef],
    ) -> list[IngredientAmount]:
        resolved: list[IngredientAmount] = []
        for ref in refs:
            ingredient = self.catalog.get_ingredient(ref.id)
            if ingredient is None:
                logger.warning("Ingredient '%s' not found, skipping", ref.id)
                continue
            try:
                entry = IngredientAmount(
                    ingredient=ingredient,
                    amount=ref.amount,
                    description=ref.description,
                )
            except ValueError as e:
                raise InvalidIngredientAmount(recipe_id, ref.id, str(e)) from e
            resolved.append(entry)
        return resolved

    def _resolve_group(
        self,
        recipe_id: str,
        group: RawIngredientGroup,
    ) -> IngredientGroup | None:
        ingredients = self._resolve_ingredients(recipe_id, group.ingredients)
        if not ingredients:
            logger.warning("No valid ingredients for group '%s', skipping", group.name)
            return None
        return IngredientGroup(
            name=group.name,
            ingredients=ingredients,
            description=group.description,
        )
