"""Load the recipes from the configured data host and print them."""

import asyncio
import logging

from rich import print
from rich.markdown import Markdown

import config
from bakery.catalog import InMemoryIngredientCatalog
from bakery.loader import ConfigLoader
from bakery.services import RecipeService


CONFIG = config.Config()


async def main() -> None:
    loader = ConfigLoader(CONFIG)
    ingredients = await loader.load_ingredients()
    service = RecipeService(
        loader=loader,
        catalog=InMemoryIngredientCatalog.from_records(ingredients.ingredients),
    )
    await service.initialize()

    for recipe in await service.get_all_recipes():
        print(Markdown(recipe.markdown))

    print(service.summary())


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if CONFIG.env is config.Env.local else logging.INFO
    )
    asyncio.run(main())
