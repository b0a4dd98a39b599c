from __future__ import annotations

from chefsense.application.voice import DEFAULT_VOICE_ERROR, describe_voice_error, speech_text
from chefsense.domain.markup import (
    RecipeCard,
    RecipeLink,
    card_for,
    encode_card,
    encode_link,
    link_for,
    parse_directives,
    to_plain_text,
)


def test_card_for_recipe_parses_back(butter_chicken):
    encoded = card_for(butter_chicken)
    assert encoded == "[RECIPE_CARD:butter-chicken:Butter Chicken:India:Dinner:20 min]"
    assert parse_directives(encoded) == [RecipeCard("butter-chicken", "Butter Chicken", "India", "Dinner", 20)]


def test_link_text_may_contain_colons(butter_chicken):
    encoded = link_for(butter_chicken, "Step 1: marinate")
    assert parse_directives(encoded) == [RecipeLink("butter-chicken", "Step 1: marinate")]


def test_unsafe_characters_are_neutralised():
    encoded = encode_card("odd:slug", "Fish [and] Chips", "U:K", "Dinner", 25)
    (card,) = parse_directives(encoded)
    assert card.slug == "odd slug"
    assert card.name == "Fish and Chips"
    assert card.country == "U K"


def test_every_recipe_in_store_round_trips(data_recipes):
    text = "\n".join(card_for(r) for r in data_recipes)
    cards = parse_directives(text)
    assert [c.slug for c in cards] == [r.slug for r in data_recipes]
    assert [c.total_minutes for c in cards] == [r.total_time_minutes for r in data_recipes]


def test_malformed_directives_are_ignored():
    text = "[RECIPE_CARD:a:b:c:d:soon] and [RECIPE_LINK:only-slug] and " + encode_link("x", "ok")
    assert parse_directives(text) == [RecipeLink("x", "ok")]


def test_plain_text_replaces_directives():
    text = "Try " + encode_link("pad-thai", "Pad Thai") + "\n" + encode_card("harira", "Harira", "Morocco", "Dinner", 60)
    assert to_plain_text(text) == "Try Pad Thai\nHarira (Morocco, 60 min)"


def test_speech_text_drops_markdown():
    reply = "### Nutrition:\n• 🔥 Calories: **520 kcal**\n" + encode_link("x", "View")
    assert speech_text(reply) == "Nutrition:\n• 🔥 Calories: 520 kcal\nView"


def test_voice_error_messages():
    assert describe_voice_error("not-allowed").startswith("Microphone access denied")
    assert describe_voice_error("NO-SPEECH") == "No speech detected. Please try again."
    assert describe_voice_error("audio-capture") == "No microphone found. Please check your device."
    assert describe_voice_error("weird") == DEFAULT_VOICE_ERROR
