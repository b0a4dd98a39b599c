from __future__ import annotations

import pytest

from chefsense.application.nutrition_advisor import (
    GENERIC_HEALTH_ADVICE,
    GENERIC_SWAPS,
    HEALTHY_ALREADY,
    get_allergens,
    get_health_advice,
    get_healthy_swaps,
    swaps_for_ingredient,
)
from chefsense.domain.entities import Nutrition
from conftest import make_recipe


def test_adding_cheese_adds_dairy_and_removing_it_drops_dairy():
    base = make_recipe("x", "Pasta Bake", ["pasta", "tomato"])
    with_cheese = make_recipe("x", "Pasta Bake", ["pasta", "tomato", "grated cheese"])

    assert "dairy" not in get_allergens(base)
    assert "dairy" in get_allergens(with_cheese)


@pytest.mark.parametrize(
    "ingredient, allergen",
    [
        ("plain flour", "gluten"),
        ("rice noodles", "gluten"),
        ("unsalted butter", "dairy"),
        ("eggs", "eggs"),
        ("roasted peanuts", "tree nuts"),
        ("soy sauce", "soy"),
        ("shrimp", "shellfish"),
        ("fish sauce", "fish"),
        ("tahini", "sesame"),
    ],
)
def test_allergen_keywords(ingredient, allergen):
    assert allergen in get_allergens(make_recipe("x", "Dish", [ingredient]))


@pytest.mark.parametrize("ingredient", ["coconut milk", "eggplant", "almond milk"])
def test_lookalike_ingredients_are_not_dairy_or_egg(ingredient):
    allergens = get_allergens(make_recipe("x", "Dish", [ingredient]))
    assert "dairy" not in allergens
    assert "eggs" not in allergens


def test_no_recipe_no_allergens():
    assert get_allergens(None) == []


def test_swaps_follow_ingredients(butter_chicken):
    swaps = get_healthy_swaps(butter_chicken)
    assert any(s.startswith("🧈") for s in swaps)
    assert any("Cream" in s for s in swaps)


def test_swaps_fallbacks():
    assert get_healthy_swaps(None) == GENERIC_SWAPS
    assert get_healthy_swaps(make_recipe("x", "Greens", ["spinach"])) == [HEALTHY_ALREADY]


def test_peanut_butter_is_not_swapped_for_olive_oil():
    assert swaps_for_ingredient("peanut butter") == []
    assert swaps_for_ingredient("what can I use instead of butter?")


def test_health_advice_uses_calorie_and_protein_bands():
    rich = make_recipe("x", "Rich", nutrition=Nutrition(800, 30, 60, 40))
    light = make_recipe("y", "Light", nutrition=Nutrition(200, 5, 20, 5))

    assert "Rich dish" in get_health_advice(rich)
    assert "Light & fresh" in get_health_advice(light)
    assert get_health_advice(make_recipe("z", "Unknown")) == GENERIC_HEALTH_ADVICE
