from __future__ import annotations

import random

import pytest

from chefsense.infrastructure.json_repositories import InMemoryRecipeRepository
from chefsense.services.search_engine import (
    RecipeSearchEngine,
    W_INGREDIENT,
    W_NAME,
    filter_recipes,
    find_by_name,
    get_by_country,
    get_by_tag,
    get_random,
    get_similar,
    score_recipe,
    scored_search,
    search,
    search_and_filter,
)
from conftest import make_recipe


def test_chicken_query_scores_name_plus_ingredient(butter_chicken, soup_with_chicken_description):
    store = [soup_with_chicken_description, butter_chicken]

    score = score_recipe(butter_chicken, ["chicken"])
    results = search(store, "chicken")

    assert score >= W_NAME + W_INGREDIENT
    assert results[0].slug == "butter-chicken"
    assert results.index(butter_chicken) < results.index(soup_with_chicken_description)


@pytest.mark.parametrize("query", ["chicken", "india curry", "easy", "rice onion", "thai noodles"])
def test_scores_are_non_increasing_and_positive(data_recipes, query):
    scored = scored_search(data_recipes, query)
    scores = [s for _, s in scored]
    assert all(s > 0 for s in scores)
    assert scores == sorted(scores, reverse=True)


def test_empty_query_returns_store_in_order(data_recipes):
    assert search(data_recipes, "") == list(data_recipes)
    assert search(data_recipes, "   ") == list(data_recipes)


@pytest.mark.parametrize("name", ["Pad Thai", "chicken fried rice", "BUTTER CHICKEN", "Harira"])
def test_exact_name_ranks_first(data_recipes, name):
    assert search(data_recipes, name)[0].name_en.lower() == name.lower()


def test_exact_name_beats_richer_partial_match():
    # "rice" would otherwise score higher on the recipe that mentions it everywhere
    plain = make_recipe("rice", "Rice", ["water"])
    loaded = make_recipe(
        "rice-bowl", "Rice Bowl", ["rice", "rice vinegar"], tags=["rice"], short_description="rice rice"
    )
    assert search([loaded, plain], "rice")[0].slug == "rice"


def test_country_counts_once_for_name_and_slug():
    r = make_recipe("x", "Dish", country="Thailand", country_slug="thailand")
    assert score_recipe(r, ["thailand"]) == 4


def test_difficulty_requires_exact_term():
    r = make_recipe("x", "Dish", difficulty="easy")
    assert score_recipe(r, ["easy"]) == 2
    assert score_recipe(r, ["eas"]) == 0


def test_ties_keep_store_order():
    a = make_recipe("a", "Tomato Soup")
    b = make_recipe("b", "Tomato Salad")
    assert [r.slug for r in search([a, b], "tomato")] == ["a", "b"]
    assert [r.slug for r in search([b, a], "tomato")] == ["b", "a"]


def test_no_match_returns_empty(data_recipes):
    assert search(data_recipes, "zzzz") == []


def test_filter_by_time_range_and_difficulty(data_recipes):
    quick = filter_recipes(data_recipes, time_range="quick")
    assert quick and all(r.total_time_minutes < 30 for r in quick)

    long_ = filter_recipes(data_recipes, time_range="long")
    assert [r.slug for r in long_] == ["butter-chicken"]

    medium = filter_recipes(data_recipes, difficulty="Medium", time_range="medium")
    assert all(r.difficulty == "medium" and 30 <= r.total_time_minutes <= 60 for r in medium)


def test_search_and_filter_combines_country_and_query(data_recipes):
    results = search_and_filter(data_recipes, "chickpeas", country="india")
    assert [r.slug for r in results] == ["chana-masala"]


def test_dietary_filter_uses_tags(data_recipes):
    slugs = {r.slug for r in filter_recipes(data_recipes, dietary="vegan")}
    assert slugs == {"chana-masala", "harira"}


def test_find_by_name_and_country(data_recipes):
    assert find_by_name(data_recipes, "pad thai").slug == "pad-thai"
    assert find_by_name(data_recipes, "") is None
    assert {r.slug for r in get_by_country(data_recipes, "India")} == {
        "butter-chicken", "chana-masala", "mango-lassi"
    }


def test_similar_excludes_itself_and_prefers_same_country(data_recipes):
    butter = find_by_name(data_recipes, "butter chicken")
    similar = get_similar(data_recipes, butter, limit=2)
    assert butter not in similar
    assert similar[0].country_slug == "india"


def test_get_random_is_seedable(data_recipes):
    a = get_random(data_recipes, 3, rng=random.Random(1))
    b = get_random(data_recipes, 3, rng=random.Random(1))
    assert a == b and len(a) == 3


def test_engine_caches_repeated_queries(data_recipes):
    engine = RecipeSearchEngine(InMemoryRecipeRepository(data_recipes))
    first = engine.search("chicken")
    assert engine.cache.get("chicken") is not None
    assert engine.search("Chicken", top_k=1) == first[:1]


def test_tag_lookup_ignores_case(data_recipes):
    assert [r.slug for r in get_by_tag(data_recipes, "Stir-Fry")] == ["pad-thai", "chicken-fried-rice"]


def test_tag_filters_ignore_case_of_stored_tags():
    shouted = make_recipe("dal", "Dal", ["lentils"], tags=["Vegan", "Gluten-Free"])
    plain = make_recipe("stew", "Beef Stew", ["beef"], tags=["comfort food"])

    assert filter_recipes([shouted, plain], dietary="vegan") == [shouted]
    assert filter_recipes([shouted, plain], tag="GLUTEN-FREE") == [shouted]
    assert get_by_tag([shouted, plain], "vegan") == [shouted]


def test_filter_by_tag_and_country(data_recipes):
    results = filter_recipes(data_recipes, country="India", tag="curry")
    assert {r.slug for r in results} == {"butter-chicken", "chana-masala"}


def test_similar_counts_shared_tags_case_insensitively():
    base = make_recipe("a", "A", tags=["Spicy"], country_slug="x", difficulty="hard")
    same_tag = make_recipe("b", "B", tags=["spicy"], country_slug="y", difficulty="easy")
    other = make_recipe("c", "C", tags=["mild"], country_slug="y", difficulty="easy")
    assert get_similar([other, same_tag, base], base, limit=1) == [same_tag]
