# chefsense/chefsense/infrastructure/json_repositories.py
from __future__ import annotations
from typing import List, Dict, Any
import logging
import ujson as json
from chefsense.core.config import MEAL_TYPES, DIETARY_STYLES, DIFFICULTIES
from chefsense.domain.entities import Recipe, Ingredient, Nutrition
from chefsense.domain.repositories import RecipeReadRepo

log = logging.getLogger("infra.json_repo")


def _as_int(v: Any, default: int = 0) -> int:
    if v is None or v == "":
        return default
    return int(v)


def _non_negative(name: str, v: Any) -> float:
    x = float(v)
    if x < 0:
        raise ValueError(f"{name} must be >= 0, got {v!r}")
    return x


def _parse_nutrition(doc: Any) -> Nutrition | None:
    if not isinstance(doc, dict) or doc.get("per_serving_kcal") is None:
        return None
    return Nutrition(
        per_serving_kcal=_non_negative("per_serving_kcal", doc.get("per_serving_kcal")),
        protein_g=_non_negative("protein_g", doc.get("protein_g") or 0),
        carbs_g=_non_negative("carbs_g", doc.get("carbs_g") or 0),
        fat_g=_non_negative("fat_g", doc.get("fat_g") or 0),
    )


def parse_recipe(doc: Dict[str, Any]) -> Recipe:
    try:
        slug = (doc.get("slug") or "").strip()
        if not slug:
            raise ValueError("slug is required")
        meal_type = (doc.get("mealType") or doc.get("meal_type") or "").strip()
        if meal_type not in MEAL_TYPES:
            raise ValueError(f"unknown mealType {meal_type!r}")
        dietary = (doc.get("dietaryStyle") or doc.get("dietary_style") or "None").strip()
        if dietary not in DIETARY_STYLES:
            raise ValueError(f"unknown dietaryStyle {dietary!r}")
        difficulty = (doc.get("difficulty") or "").strip().lower()
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"unknown difficulty {difficulty!r}")

        prep = _as_int(doc.get("prep_time_minutes"))
        cook = _as_int(doc.get("cooking_time_minutes"))
        if prep < 0 or cook < 0:
            raise ValueError("times must be >= 0")
        servings = _as_int(doc.get("servings"), default=1)
        if servings <= 0:
            raise ValueError("servings must be positive")

        ingredients = [
            Ingredient(
                name=(i.get("name") or "").strip(),
                amount=i.get("amount"),
                unit=i.get("unit"),
            )
            for i in (doc.get("ingredients") or [])
            if (i.get("name") or "").strip()
        ]
        country = (doc.get("country") or "").strip()
        return Recipe(
            slug=slug,
            name_en=(doc.get("name_en") or "").strip(),
            name_local=(doc.get("name_local") or "").strip(),
            country=country,
            country_slug=(doc.get("country_slug") or country.lower().replace(" ", "-")).strip(),
            meal_type=meal_type,
            dietary_style=dietary,
            difficulty=difficulty,
            short_description=(doc.get("short_description") or "").strip(),
            ingredients=ingredients,
            steps=[s for s in (doc.get("steps") or []) if s],
            prep_time_minutes=prep,
            cooking_time_minutes=cook,
            servings=servings,
            tags=[str(t).strip().lower() for t in (doc.get("tags") or []) if str(t).strip()],
            cooking_tips=list(doc.get("cooking_tips") or []),
            nutrition_benefits=list(doc.get("nutrition_benefits") or []),
            nutrition=_parse_nutrition(doc.get("nutrition")),
        )
    except (TypeError, AttributeError, ValueError) as e:
        raise ValueError(f"Invalid recipe document {doc.get('slug') if isinstance(doc, dict) else doc!r}: {e}") from e


def parse_recipes(docs: List[Dict[str, Any]]) -> List[Recipe]:
    """Parse documents, skipping invalid ones and duplicate slugs."""
    items: List[Recipe] = []
    seen: set[str] = set()
    for doc in docs:
        try:
            r = parse_recipe(doc)
        except ValueError:
            log.exception("Skipping invalid recipe document")
            continue
        if r.slug in seen:
            log.warning("Duplicate recipe slug %s ignored", r.slug)
            continue
        seen.add(r.slug)
        items.append(r)
    return items


class InMemoryRecipeRepository(RecipeReadRepo):
    def __init__(self, recipes: List[Recipe]) -> None:
        self._items: List[Recipe] = []
        self._by_slug: Dict[str, Recipe] = {}
        for r in recipes:
            if r.slug in self._by_slug:
                log.warning("Duplicate recipe slug %s ignored", r.slug)
                continue
            self._items.append(r)
            self._by_slug[r.slug] = r

    def all(self) -> List[Recipe]:
        return self._items

    def by_slug(self, slug: str) -> Recipe | None:
        return self._by_slug.get(str(slug))


class JsonRecipeRepository(InMemoryRecipeRepository):
    """
    Read-only recipe repository backed by a static JSON file.
    Loads once; an unreadable source yields an empty store (no retry).
    """
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(self._load(path))
        if not self._items:
            log.warning("JsonRecipeRepository: no recipes loaded from %s", path)
        else:
            log.info("JsonRecipeRepository loaded %d recipes", len(self._items))

    @staticmethod
    def _load(path: str) -> List[Recipe]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            log.exception("Error fetching recipes from %s", path)
            return []
        if isinstance(data, dict):
            data = data.get("recipes") or []
        if not isinstance(data, list):
            log.error("Recipes source %s is not a list", path)
            return []
        return parse_recipes(data)
