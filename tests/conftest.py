from typing import Any

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

import config
from bakery.catalog import InMemoryIngredientCatalog
from bakery.loader import ConfigLoader
from bakery.services import RecipeService


RECIPES_PATH = "/data/recipes.json"
TEMPLATES_PATH = "/data/recipe-templates.json"
INGREDIENTS_PATH = "/data/ingredients.json"
BAKERY_CONFIG = config.Config(data_url="http://bakery.test")


TEMPLATES: dict[str, Any] = {
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
        "mix-group": {
            "name": "Mix {label} Ingredients",
            "type": "preparation",
            "instructions": ["In a bowl, combine {group:dry}", "Mix until {consistency}"],
            "defaultParams": {"label": "Dry", "consistency": "smooth"},
        },
        "mix-ingredients": {
            "name": "Mix Ingredients",
            "type": "preparation",
            "instructions": ["Combine all ingredients"],
            "defaultParams": {"estimatedTime": 5},
        },
    }
}


def recipe(
    id: str,
    *steps: dict[str, Any],
    difficulty: str = "easy",
    tags: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "id": id,
        "metadata": {
            "name": id.replace("-", " ").title(),
            "description": f"The {id} recipe",
            "baseServings": 4,
            "difficulty": difficulty,
            "bakingTime": 30,
            "icon": "🧪",
            "tags": tags or [],
        },
        "steps": list(steps),
    }


BAKE_STEP: dict[str, Any] = {"template": "bake", "params": {"time": 25, "temp": 375}}


class FakeDataHost:
    """Serves documents by path and remembers every request."""

    def __init__(self, documents: dict[str, Any] | None = None) -> None:
        self.documents = {} if documents is None else documents
        self.requests: list[str] = []
        self.unreachable: set[str] = set()

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if path in self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)
        if path not in self.documents:
            return httpx.Response(404)
        document = self.documents[path]
        if isinstance(document, bytes):
            return httpx.Response(200, content=document)
        return httpx.Response(200, json=document)

    def count(self, path: str) -> int:
        return self.requests.count(path)

    def serve_recipes(self, *recipes: dict[str, Any]) -> None:
        self.documents[RECIPES_PATH] = {"recipes": list(recipes)}


@pytest.fixture
def host() -> FakeDataHost:
    return FakeDataHost({TEMPLATES_PATH: TEMPLATES})


@pytest_asyncio.fixture
async def client(host: FakeDataHost) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(host.handler)) as client:
        yield client


@pytest.fixture
def loader(client: httpx.AsyncClient) -> ConfigLoader:
    return ConfigLoader(BAKERY_CONFIG, http_client=client)


@pytest.fixture
def service(loader: ConfigLoader) -> RecipeService:
    return RecipeService(loader=loader, catalog=InMemoryIngredientCatalog())
