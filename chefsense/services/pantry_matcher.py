# chefsense/chefsense/services/pantry_matcher.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from chefsense.domain.entities import Recipe

log = logging.getLogger("services.pantry_matcher")

_RE_PROMPT = re.compile(
    r"(i have|i've got|ive got|i got|only have|what can i (?:cook|make)|cook with|make with|"
    r"use.*have|using|leftover)"
)
_RE_COOK_WORD = re.compile(r"cook|make|recipe|idea|suggest")

_RE_VEGAN = re.compile(r"vegan")
_RE_VEGETARIAN = re.compile(r"vegetarian|veggie")
_RE_GLUTEN_FREE = re.compile(r"gluten[-\s]?free")
_RE_SALAD = re.compile(r"salad")
_RE_SOUP = re.compile(r"soup|stew|broth")
_RE_DESSERT = re.compile(r"dessert|sweet")

_SOUP_WORDS = ("soup", "stew", "broth")
# words that set PantryContext.diet
DIET_WORDS = frozenset({"vegan", "vegetarian", "veggie"})


@dataclass(frozen=True)
class PantryContext:
    diet: Optional[str] = None  # "vegan" | "vegetarian"
    meal_type: Optional[str] = None  # "soup" | "dessert"
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PantryMatch:
    recipe: Recipe
    matched_ingredients: List[str]

    @property
    def overlap(self) -> int:
        return len(self.matched_ingredients)


def is_pantry_query(message: str, tokens: Sequence[str]) -> bool:
    """
    Conservative gate: (prompt phrase or ingredient list) AND a cooking word
    AND at least two ingredient tokens.
    """
    normalized = (message or "").lower()
    has_list = "," in normalized or len(tokens) >= 3
    has_prompt = bool(_RE_PROMPT.search(normalized))
    mentions_cook = bool(_RE_COOK_WORD.search(normalized))
    return (has_prompt or has_list) and mentions_cook and len(tokens) >= 2


def extract_context_hints(message: str) -> PantryContext:
    normalized = (message or "").lower()
    diet = None
    if _RE_VEGAN.search(normalized):
        diet = "vegan"
    if _RE_VEGETARIAN.search(normalized):
        diet = "vegetarian"
    tags: List[str] = []
    if _RE_GLUTEN_FREE.search(normalized):
        tags.append("gluten-free")
    if _RE_SALAD.search(normalized):
        tags.append("salad")
    meal_type = None
    if _RE_SOUP.search(normalized):
        meal_type = "soup"
    if _RE_DESSERT.search(normalized):
        meal_type = "dessert"
    return PantryContext(diet=diet, meal_type=meal_type, tags=tags)


def _token_in(token: str, name: str) -> bool:
    if token in name:
        return True
    # "onions" should find "onion", "tomatoes" should find "tomato"
    if token.endswith("es") and len(token) > 4 and token[:-2] in name:
        return True
    return token.endswith("s") and len(token) > 3 and token[:-1] in name


def matched_tokens(recipe: Recipe, tokens: Sequence[str]) -> List[str]:
    names = recipe.ingredient_names()
    return [t for t in tokens if any(_token_in(t, n) for n in names)]


def diet_compatible(recipe: Recipe, diet: str) -> bool:
    tags = [t.lower() for t in recipe.tags]
    if diet == "vegan":
        return recipe.dietary_style == "Vegan" or "vegan" in tags
    if diet == "vegetarian":
        return recipe.dietary_style in ("Vegan", "Vegetarian") or "vegetarian" in tags or "vegan" in tags
    return True


def _context_bonus(recipe: Recipe, context: PantryContext) -> int:
    bonus = 0
    tags = [t.lower() for t in recipe.tags]
    if context.meal_type == "dessert" and recipe.meal_type == "Dessert":
        bonus += 1
    if context.meal_type == "soup":
        hay = " ".join(tags + [recipe.name_en.lower()])
        if any(w in hay for w in _SOUP_WORDS):
            bonus += 1
    bonus += len([t for t in context.tags if t in tags])
    return bonus


def find_matches_by_ingredients(
    recipes: Sequence[Recipe],
    tokens: Sequence[str],
    context: Optional[PantryContext] = None,
    limit: int = 4,
) -> List[PantryMatch]:
    """Recipes sharing the most ingredients with `tokens`, best first."""
    context = context or PantryContext()
    toks = [t.lower() for t in tokens if t]
    if not toks or limit <= 0:
        return []

    candidates: List[PantryMatch] = []
    for r in recipes:
        hits = matched_tokens(r, toks)
        if hits:
            candidates.append(PantryMatch(recipe=r, matched_ingredients=hits))

    if context.diet:
        compatible = [m for m in candidates if diet_compatible(m.recipe, context.diet)]
        if compatible:
            candidates = compatible
        else:
            log.debug("no %s-compatible pantry match, keeping %d candidates", context.diet, len(candidates))

    candidates.sort(key=lambda m: (-m.overlap, -_context_bonus(m.recipe, context)))
    return candidates[:limit]
