from __future__ import annotations

import pytest

from chefsense.application.rule_engine import INTENT_ORDER, RuleEngine, detect_meal_type
from chefsense.core.config import INTENTS


@pytest.fixture
def rules():
    return RuleEngine()


def test_intent_order_is_the_documented_contract():
    assert INTENT_ORDER == INTENTS
    assert INTENT_ORDER[0] == "debug" and INTENT_ORDER[-1] == "unknown"


@pytest.mark.parametrize(
    "text, intent",
    [
        ("/debug last", "debug"),
        ("Hello there", "greeting"),
        ("bonjour", "greeting"),
        ("How do I make Pad Thai?", "how_to_make"),
        ("What are the ingredients for shakshuka?", "ingredients"),
        ("Is chana masala vegan?", "dietary_info"),
        ("How many calories are in butter chicken?", "dietary_info"),
        ("what about calories?", "nutrition"),
        ("What can I use instead of butter?", "substitution"),
        ("Any ideas for breakfast?", "meal_type"),
        ("How long does harira take?", "time"),
        ("Any tips for the mousse?", "tips"),
        ("Show my favorites", "favorites"),
        ("Show me some recipes", "recipe_search"),
        ("blorp", "unknown"),
    ],
)
def test_classification(rules, text, intent):
    assert rules.classify(text).intent == intent


def test_earlier_rule_wins_on_overlap(rules):
    # mentions both a how-to phrase and calories
    assert rules.classify("How do I make a healthy breakfast?").intent == "how_to_make"
    # nutrition sits before substitution
    assert rules.classify("Is there a healthier swap?").intent == "nutrition"


def test_follow_up_needs_current_recipe(rules):
    assert rules.classify("and the pad thai?", has_current_recipe=True).intent == "follow_up"
    assert rules.classify("and the pad thai?", has_current_recipe=False).intent == "unknown"


def test_search_probe_catches_bare_dish_names():
    probe_rules = RuleEngine(search_probe=lambda t: "harira" in t)
    assert probe_rules.classify("harira").intent == "recipe_search"
    assert probe_rules.classify("harira").payload == {"probe": True}
    assert probe_rules.classify("pizza").intent == "unknown"


def test_classification_is_deterministic(rules):
    messages = ["what about calories?", "and also tips?", "Pad Thai please", ""]
    for has_recipe in (False, True):
        first = [rules.classify(m, has_recipe) for m in messages]
        again = [rules.classify(m, has_recipe) for m in messages]
        assert first == again


def test_payloads(rules):
    assert rules.classify("Is it gluten free?").payload == {"aspect": "gluten-free"}
    assert rules.classify("Does it contain eggs?").payload == {"aspect": "contains", "item": "eggs"}
    assert rules.classify("something for dessert").payload == {"meal_type": "Dessert"}
    assert detect_meal_type("a quick snack") == "Appetizer"
    assert detect_meal_type("nothing here") is None


@pytest.mark.parametrize(
    "text",
    [
        "Do you have any vegan recipes?",
        "Are there any gluten-free dishes?",
        "Do you have any vegetarian options?",
        "What vegan recipes do you have?",
    ],
)
def test_diet_word_in_a_list_request_is_a_search(rules, text):
    for has_recipe in (False, True):
        assert rules.classify(text, has_recipe).intent == "recipe_search"


def test_diet_question_about_one_dish_stays_dietary(rules):
    assert rules.classify("Is this recipe vegan?", True).intent == "dietary_info"
    assert rules.classify("Does pad thai contain peanuts?").payload == {"aspect": "contains", "item": "peanuts"}
