"""
Pytest configuration and shared fixtures.

Recipe fixtures come in two flavours: small hand-built stores for scoring
and matching tests, and the bundled data/recipes.json for dialogue tests.
"""
from __future__ import annotations

import os
import random

import pytest

from chefsense.core.config import Paths
from chefsense.domain.entities import Ingredient, Nutrition, Recipe
from chefsense.infrastructure.json_repositories import InMemoryRecipeRepository, JsonRecipeRepository
from chefsense.infrastructure.favorites_store import InMemoryFavoritesStore
from chefsense.infrastructure.session_store import InMemorySessionStore
from chefsense.services.search_engine import RecipeSearchEngine
from chefsense.application.response_composer import ResponseComposer
from chefsense.application.dialogue_manager import DialogueManager


def make_recipe(slug: str, name: str, ingredients=(), **overrides) -> Recipe:
    """Build a Recipe with sensible defaults; only what a test cares about needs passing."""
    fields = dict(
        slug=slug,
        name_en=name,
        name_local="",
        country="Nowhere",
        country_slug="nowhere",
        meal_type="Dinner",
        dietary_style="None",
        difficulty="easy",
        short_description="",
        ingredients=[Ingredient(name=i) for i in ingredients],
        steps=["Cook it."],
        prep_time_minutes=10,
        cooking_time_minutes=10,
        servings=2,
        tags=[],
        cooking_tips=[],
        nutrition_benefits=[],
        nutrition=None,
    )
    fields.update(overrides)
    return Recipe(**fields)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def butter_chicken():
    return make_recipe(
        "butter-chicken",
        "Butter Chicken",
        ["chicken breast", "butter", "heavy cream", "tomato puree", "garam masala"],
        country="India",
        country_slug="india",
        difficulty="medium",
        short_description="Creamy tomato curry.",
        tags=["curry"],
        steps=["Marinate the chicken.", "Sear it.", "Simmer in sauce."],
        nutrition=Nutrition(per_serving_kcal=520, protein_g=38, carbs_g=14, fat_g=34),
    )


@pytest.fixture
def soup_with_chicken_description():
    return make_recipe(
        "vegetable-soup",
        "Garden Vegetable Soup",
        ["carrot", "celery", "potato"],
        short_description="Tastes great with leftover chicken on the side.",
        tags=["soup"],
    )


@pytest.fixture
def data_repo():
    return JsonRecipeRepository(os.path.join(Paths.DATA_DIR, "recipes.json"))


@pytest.fixture
def data_recipes(data_repo):
    return data_repo.all()


@pytest.fixture
def dialogue(data_repo):
    """Dialogue manager over the bundled recipes, zero delay, seeded composer."""
    return DialogueManager(
        sessions=InMemorySessionStore(),
        recipe_repo=data_repo,
        search_engine=RecipeSearchEngine(data_repo),
        favorites=InMemoryFavoritesStore(["pad-thai"]),
        composer=ResponseComposer(rng=random.Random(7)),
        response_delay_s=0.0,
    )


@pytest.fixture
def empty_dialogue():
    repo = InMemoryRecipeRepository([])
    return DialogueManager(sessions=InMemorySessionStore(), recipe_repo=repo)
