from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

import markdown2  # pyright: ignore[reportMissingTypeStubs]

from bakery import templates
from bakery.documents import AmountRange


class Difficulty(Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class Ingredient:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        unit: str,
        icon: str = "",
        unit_weight: float = 0,
    ) -> None:
        self.id = id
        self.name = name
        self.unit = unit
        self.icon = icon
        self.unit_weight = unit_weight

    def __repr__(self) -> str:
        return f"<Ingredient(id={self.id}, unit={self.unit})>"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ingredient) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)


class IngredientAmount:
    """An ingredient and how much of it a step wants.

    Either a fixed amount or a range, in which case the recommended value is
    what gets shown.
    """

    def __init__(
        self,
        *,
        ingredient: Ingredient,
        amount: float | AmountRange,
        description: str | None = None,
    ) -> None:
        self.ingredient = ingredient
        self.description = description
        if isinstance(amount, AmountRange):
            if amount.min < 0:
                raise ValueError("Range minimum cannot be negative")
            if amount.min >= amount.max:
                raise ValueError(
                    f"Invalid range: min ({amount.min}) must be less than max ({amount.max})"
                )
            self.range: AmountRange | None = amount
            self.amount = amount.default
        else:
            self.range = None
            self.amount = amount

    def __repr__(self) -> str:
        return f"<IngredientAmount({self.display()})>"

    @property
    def is_fixed(self) -> bool:
        return self.range is None

    @property
    def grams(self) -> float:
        return self.amount * self.ingredient.unit_weight

    def display(self) -> str:
        amount = templates.format_value(self.amount)
        return f"{amount} {self.ingredient.unit} {self.ingredient.name}"


class IngredientGroup:
    def __init__(
        self,
        *,
        name: str,
        ingredients: Sequence[IngredientAmount],
        description: str | None = None,
    ) -> None:
        self.name = name
        self.ingredients = tuple(ingredients)
        self.description = description

    def __repr__(self) -> str:
        return f"<IngredientGroup(name={self.name}, n={len(self.ingredients)})>"


class Step:
    def __init__(
        self,
        *,
        id: str,
        order: int,
        name: str,
        type: str,
        instructions: Sequence[str],
        parameters: Mapping[str, Any],
        description: str = "",
        estimated_time: int | None = None,
        temperature: float | None = None,
        ingredients: Sequence[IngredientAmount] = (),
        groups: Sequence[IngredientGroup] = (),
    ) -> None:
        self.id = id
        self.order = order
        self.name = name
        self.type = type
        self.instructions = tuple(instructions)
        self.parameters = dict(parameters)
        self.description = description
        self.estimated_time = estimated_time
        self.temperature = temperature
        self.ingredients = tuple(ingredients)
        self.groups = tuple(groups)

    def __repr__(self) -> str:
        return f"<Step(id={self.id}, name={self.name})>"

    def get_formatted_instructions(self) -> list[str]:
        return templates.resolve_instructions(
            self.instructions, self.parameters, self.groups
        )

    def get_group(self, name: str) -> IngredientGroup | None:
        return next((g for g in self.groups if g.name == name), None)

    def uses_ingredient(self, ingredient_id: str) -> bool:
        return ingredient_id in self.ingredient_ids

    @property
    def ingredient_ids(self) -> list[str]:
        entries = list(self.ingredients)
        for group in self.groups:
            entries.extend(group.ingredients)
        ids: list[str] = []
        for entry in entries:
            if entry.ingredient.id not in ids:
                ids.append(entry.ingredient.id)
        return ids

    def display(self) -> str:
        time = f" ({self.estimated_time}min)" if self.estimated_time else ""
        temp = f" @ {templates.format_value(self.temperature)}°F" if self.temperature else ""
        return f"{self.order}. {self.name}{time}{temp}"


class Recipe:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        description: str,
        icon: str,
        base_servings: int,
        difficulty: Difficulty,
        baking_time: int,
        steps: Sequence[Step],
        tags: Sequence[str] = (),
        skill_level: str | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.description = description
        self.icon = icon
        self.base_servings = base_servings
        self.difficulty = difficulty
        self.baking_time = baking_time
        self.steps = tuple(steps)
        self.tags = tuple(tags)
        self.skill_level = skill_level

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name={self.name})>"

    def get_step(self, order: int) -> Step | None:
        return next((s for s in self.steps if s.order == order), None)

    @property
    def total_estimated_time(self) -> int:
        return sum(s.estimated_time for s in self.steps if s.estimated_time)

    @property
    def ingredient_ids(self) -> list[str]:
        ids: list[str] = []
        for step in self.steps:
            ids.extend(i for i in step.ingredient_ids if i not in ids)
        return ids

    @property
    def markdown(self) -> str:
        title = f"{self.icon} {self.name}".strip()
        lines = [f"# {title}", ""]
        if self.description:
            lines += [self.description, ""]
        lines += [
            f"Serves {self.base_servings} · {self.difficulty.value} · "
            f"{self.baking_time} minutes",
            "",
        ]
        for step in self.steps:
            lines += [f"## {step.display()}", ""]
            for entry in step.ingredients:
                lines.append(f"- {entry.display()}")
            for group in step.groups:
                lines.append(f"- **{group.name}**: {templates.format_group(group)}")
            if step.ingredients or step.groups:
                lines.append("")
            for n, instruction in enumerate(step.get_formatted_instructions(), 1):
                lines.append(f"{n}. {instruction}")
            lines.append("")
        return "\n".join(lines)

    @property
    def html(self) -> str:
        return markdown2.markdown(  # pyright: ignore[reportUnknownVariableType, reportUnknownMemberType]
            self.markdown, extras=["fences", "tables"]
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "baseServings": self.base_servings,
            "difficulty": self.difficulty.value,
            "bakingTime": self.baking_time,
            "tags": list(self.tags),
            "steps": [
                {
                    "id": s.id,
                    "name": s.name,
                    "type": s.type,
                    "instructions": s.get_formatted_instructions(),
                }
                for s in self.steps
            ],
        }
