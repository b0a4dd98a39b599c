from __future__ import annotations

import pytest

from chefsense.services.pantry_matcher import (
    PantryContext,
    extract_context_hints,
    find_matches_by_ingredients,
    is_pantry_query,
    matched_tokens,
)
from chefsense.services.text_normalizer import (
    content_terms,
    extract_ingredient_tokens,
    search_terms,
    tokenize,
)
from conftest import make_recipe


# ---------- tokenizer ----------
def test_tokenize_splits_on_commas_and_whitespace():
    assert tokenize("Chicken,  Rice\tonions") == ["chicken", "rice", "onions"]
    assert tokenize("  ") == []


def test_ingredient_tokens_drop_fillers_and_duplicates():
    tokens = extract_ingredient_tokens("I have chicken, onions and rice, what can I cook? Chicken!")
    assert tokens == ["chicken", "onions", "rice"]


def test_content_terms_strip_question_words():
    assert content_terms("How many calories are in Butter Chicken?") == ["butter", "chicken"]
    assert content_terms("what about calories?") == []


def test_search_terms_keep_diet_and_dish_words():
    assert search_terms("What vegan recipes do you have?") == ["vegan"]
    assert search_terms("Show me gluten-free dishes") == ["gluten-free"]
    assert search_terms("Any quick soup or dessert ideas?") == ["soup", "dessert"]
    assert content_terms("What vegan recipes do you have?") == []


# ---------- gate ----------
PANTRY = "I have chicken, onions and rice, what can I cook?"


def _gate(message: str) -> bool:
    return is_pantry_query(message, extract_ingredient_tokens(message))


def test_pantry_scenario_message_enters_pantry_mode():
    assert _gate(PANTRY)
    assert len(extract_ingredient_tokens(PANTRY)) >= 3


@pytest.mark.parametrize(
    "message",
    [
        # no prompt phrase, no comma, fewer than three tokens
        "chicken rice cook",
        # no cooking word
        "I have chicken, onions and rice",
        # only one ingredient token
        "I have chicken, what can I cook?",
    ],
)
def test_dropping_any_gate_condition_leaves_pantry_mode(message):
    assert not _gate(message)


def test_ingredient_list_without_prompt_phrase_is_enough():
    assert _gate("tomatoes, pasta, garlic - any recipe ideas")


# ---------- matching ----------
@pytest.fixture
def pantry_store():
    return [
        make_recipe("rice-bowl", "Rice Bowl", ["white rice", "scallions"]),
        make_recipe("fried-rice", "Chicken Fried Rice", ["chicken thigh", "onion", "white rice"]),
        make_recipe("roast", "Roast Chicken", ["whole chicken", "onion"]),
        make_recipe("salad", "Green Salad", ["lettuce"]),
    ]


def test_best_match_has_largest_overlap(pantry_store):
    matches = find_matches_by_ingredients(pantry_store, ["chicken", "onions", "rice"])
    assert matches[0].recipe.slug == "fried-rice"
    assert [m.overlap for m in matches] == sorted((m.overlap for m in matches), reverse=True)


def test_matches_are_non_empty_subsets_of_tokens(pantry_store):
    tokens = ["chicken", "onions", "rice", "lettuce", "saffron"]
    matches = find_matches_by_ingredients(pantry_store, tokens, limit=10)
    assert matches
    for m in matches:
        assert m.matched_ingredients
        assert set(m.matched_ingredients) <= set(tokens)


def test_no_overlap_means_no_match(pantry_store):
    assert find_matches_by_ingredients(pantry_store, ["saffron", "quince"]) == []
    assert find_matches_by_ingredients(pantry_store, []) == []


def test_plural_tokens_match_singular_ingredients():
    r = make_recipe("x", "Salsa", ["tomato", "onion"])
    assert matched_tokens(r, ["tomatoes", "onions"]) == ["tomatoes", "onions"]


def test_limit_is_respected(data_recipes):
    assert len(find_matches_by_ingredients(data_recipes, ["onion", "garlic"], limit=2)) == 2


def test_diet_filter_prefers_compatible_recipes(data_recipes):
    context = PantryContext(diet="vegan")
    matches = find_matches_by_ingredients(data_recipes, ["onion", "tomatoes"], context=context)
    assert matches and all(m.recipe.dietary_style == "Vegan" for m in matches)


def test_diet_filter_falls_back_when_nothing_is_compatible():
    only_meat = [make_recipe("beef", "Beef Stew", ["beef", "onion"])]
    matches = find_matches_by_ingredients(only_meat, ["onion"], context=PantryContext(diet="vegan"))
    assert [m.recipe.slug for m in matches] == ["beef"]


def test_context_tags_break_overlap_ties():
    plain = make_recipe("plain", "Onion Bake", ["onion"])
    soup = make_recipe("soup", "Onion Soup", ["onion"], tags=["soup"])
    matches = find_matches_by_ingredients([plain, soup], ["onion"], context=extract_context_hints("a soup please"))
    assert matches[0].recipe.slug == "soup"


def test_context_hints():
    ctx = extract_context_hints("Something vegetarian and gluten-free, maybe a salad or soup")
    assert ctx.diet == "vegetarian"
    assert ctx.tags == ["gluten-free", "salad"]
    assert ctx.meal_type == "soup"
