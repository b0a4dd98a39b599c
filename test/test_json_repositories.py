from __future__ import annotations

import json

import pytest

from chefsense.infrastructure.favorites_store import JsonFavoritesStore
from chefsense.infrastructure.json_repositories import JsonRecipeRepository, parse_recipe, parse_recipes
from chefsense.services.fuzzy_matcher import FuzzyRecipeMatcher


def _doc(**overrides):
    doc = {
        "slug": "toast",
        "name_en": "Toast",
        "country": "United Kingdom",
        "mealType": "Breakfast",
        "dietaryStyle": "Vegetarian",
        "difficulty": "Easy",
        "ingredients": [{"name": "bread", "amount": 2, "unit": "slices"}, {"name": ""}],
        "steps": ["Toast the bread."],
        "prep_time_minutes": 1,
        "cooking_time_minutes": 3,
        "servings": 1,
    }
    doc.update(overrides)
    return doc


def test_parse_recipe_normalises_fields():
    r = parse_recipe(_doc())
    assert r.difficulty == "easy"
    assert r.country_slug == "united-kingdom"
    assert [i.name for i in r.ingredients] == ["bread"]
    assert r.total_time_minutes == 4
    assert r.nutrition is None
    assert r.cooking_tips == []


def test_tags_are_lowercased_on_load():
    r = parse_recipe(_doc(tags=["Vegan", " Quick ", ""]))
    assert r.tags == ["vegan", "quick"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"slug": ""},
        {"mealType": "Elevenses"},
        {"dietaryStyle": "Carnivore"},
        {"difficulty": "impossible"},
        {"prep_time_minutes": -5},
        {"servings": 0},
        {"nutrition": {"per_serving_kcal": -1}},
    ],
)
def test_invalid_documents_raise_value_error(overrides):
    with pytest.raises(ValueError):
        parse_recipe(_doc(**overrides))


def test_parse_recipes_skips_invalid_and_duplicates():
    docs = [_doc(), _doc(slug="bad", mealType="??"), _doc(name_en="Toast again")]
    recipes = parse_recipes(docs)
    assert [r.name_en for r in recipes] == ["Toast"]


def test_repository_accepts_list_or_wrapped_object(tmp_path):
    as_list = tmp_path / "list.json"
    as_list.write_text(json.dumps([_doc()]), encoding="utf-8")
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"recipes": [_doc()]}), encoding="utf-8")

    assert JsonRecipeRepository(str(as_list)).by_slug("toast").name_en == "Toast"
    assert len(JsonRecipeRepository(str(wrapped)).all()) == 1


def test_unreadable_source_yields_empty_store(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    assert JsonRecipeRepository(str(broken)).all() == []
    assert JsonRecipeRepository(str(tmp_path / "missing.json")).all() == []


def test_bundled_data_loads(data_recipes):
    assert len(data_recipes) == 9
    assert all(r.is_cookable for r in data_recipes)


def test_favorites_store(tmp_path):
    path = tmp_path / "favorites.json"
    path.write_text(json.dumps(["pad-thai", "harira", "pad-thai"]), encoding="utf-8")
    store = JsonFavoritesStore(str(path))
    assert store.get_all() == ["pad-thai", "harira"]
    assert store.is_favorite("harira") and not store.is_favorite("toast")
    assert JsonFavoritesStore(str(tmp_path / "none.json")).get_all() == []


def test_fuzzy_matcher_tolerates_typos(data_recipes):
    matcher = FuzzyRecipeMatcher(data_recipes, min_score=0.05)
    (top, score), *_ = matcher.match("pad thia")
    assert top.slug == "pad-thai"
    assert score >= matcher.min_score
    assert FuzzyRecipeMatcher(data_recipes, min_score=0.99).match("pad thia") == []
    assert matcher.match("") == []
    assert FuzzyRecipeMatcher([]).match("pad thai") == []
