from collections.abc import Iterable
from typing import Protocol

from bakery.documents import IngredientRecord
from bakery.models import Ingredient


class IngredientCatalog(Protocol):
    def get_ingredient(self, id: str) -> Ingredient | None: ...


STARTER_INGREDIENTS = (
    Ingredient(id="flour", name="Flour", unit="cups", icon="🌾", unit_weight=120),
    Ingredient(id="butter", name="Butter", unit="sticks", icon="🧈", unit_weight=113),
    Ingredient(id="eggs", name="Eggs", unit="pieces", icon="🥚", unit_weight=50),
    Ingredient(id="sugar", name="Sugar", unit="teaspoons", icon="🍬", unit_weight=4.2),
)


class InMemoryIngredientCatalog:
    """Ingredient lookup backed by a dict."""

    def __init__(self, ingredients: Iterable[Ingredient] = STARTER_INGREDIENTS) -> None:
        self.ingredients = {i.id: i for i in ingredients}

    @classmethod
    def from_records(
        cls,
        records: Iterable[IngredientRecord],
        *,
        starters: Iterable[Ingredient] = STARTER_INGREDIENTS,
    ) -> "InMemoryIngredientCatalog":
        """Starter ingredients plus those from an ingredients document.

        A record with the same id as a starter replaces it.
        """
        catalog = cls(starters)
        for r in records:
            catalog.add(
                Ingredient(
                    id=r.id,
                    name=r.name,
                    unit=r.default_unit,
                    icon=r.icon or "",
                    unit_weight=r.unit_weight,
                )
            )
        return catalog

    def get_ingredient(self, id: str) -> Ingredient | None:
        return self.ingredients.get(id)

    def add(self, ingredient: Ingredient) -> None:
        self.ingredients[ingredient.id] = ingredient

    def __contains__(self, id: object) -> bool:
        return id in self.ingredients

    def __len__(self) -> int:
        return len(self.ingredients)
