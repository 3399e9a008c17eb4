from typing import Any

import pytest

from bakery.models import Ingredient, IngredientAmount, IngredientGroup
from bakery.templates import (
    format_value,
    merge_params,
    missing_params,
    resolve_instructions,
    resolve_name,
)


FLOUR = Ingredient(id="flour", name="Flour", unit="cups")
SUGAR = Ingredient(id="sugar", name="Sugar", unit="teaspoons")


def dry_group() -> IngredientGroup:
    return IngredientGroup(
        name="dry",
        ingredients=[
            IngredientAmount(ingredient=FLOUR, amount=2),
            IngredientAmount(ingredient=SUGAR, amount=10),
        ],
    )


def test_resolve_instructions_params() -> None:
    params = merge_params({}, {"time": 25, "temp": 375})
    got = resolve_instructions(["Bake for {time} minutes at {temp}°F"], params)
    assert got == ["Bake for 25 minutes at 375°F"]


def test_resolve_instructions_group() -> None:
    got = resolve_instructions(["Combine {group:dry}"], {}, [dry_group()])
    assert got == ["Combine 2 cups Flour, 10 teaspoons Sugar"]


def test_resolve_instructions_keeps_order() -> None:
    got = resolve_instructions(["{a}", "{b}", "{a}{b}"], {"a": 1, "b": 2})
    assert got == ["1", "2", "12"]


def test_missing_param_left_in_place() -> None:
    got = resolve_instructions(["Bake for {time} minutes at {temp}°F"], {"time": 10})
    assert got == ["Bake for 10 minutes at {temp}°F"]


@pytest.mark.parametrize(
    "groups",
    (
        [],
        [IngredientGroup(name="dry", ingredients=[])],
        [IngredientGroup(name="wet", ingredients=[IngredientAmount(ingredient=FLOUR, amount=1)])],
    ),
)
def test_unknown_or_empty_group_is_empty(groups: list[IngredientGroup]) -> None:
    assert resolve_instructions(["Combine {group:dry}."], {}, groups) == ["Combine ."]


def test_group_placeholder_ignores_params() -> None:
    got = resolve_instructions(["{group:dry}"], {"group:dry": "nope", "dry": "nope"})
    assert got == [""]


def test_merge_params_step_wins() -> None:
    defaults = {"estimatedTime": 5, "temp": 350}
    got = merge_params(defaults, {"temp": 375})
    assert got == {"estimatedTime": 5, "temp": 375}
    assert defaults == {"estimatedTime": 5, "temp": 350}


def test_merge_params_none() -> None:
    assert merge_params(None, None) == {}


def test_resolve_name() -> None:
    assert resolve_name("Mix {label} Ingredients", {"label": "Wet"}) == "Mix Wet Ingredients"
    assert resolve_name("Mix {label} Ingredients", {}) == "Mix {label} Ingredients"


def test_missing_params() -> None:
    assert missing_params(["time", "temp"], {"time": 10}) == ["temp"]
    assert missing_params([], {}) == []


@pytest.mark.parametrize(
    "value,expected",
    (
        (25, "25"),
        (25.0, "25"),
        (2.5, "2.5"),
        (True, "true"),
        (False, "false"),
        (None, ""),
        ("golden brown", "golden brown"),
    ),
)
def test_format_value(value: Any, expected: str) -> None:
    assert format_value(value) == expected
