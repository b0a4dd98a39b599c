# =========================
# FILE: chefsense/chefsense/services/search_engine.py
# (weighted keyword scoring + browse filters + cache TTL)
# =========================
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import random
import time

from chefsense.domain.entities import Recipe
from chefsense.domain.repositories import RecipeReadRepo
from chefsense.services.text_normalizer import tokenize

log = logging.getLogger("services.search_engine")

W_NAME = 5
W_COUNTRY = 4
W_INGREDIENT = 3
W_TAG = 3
W_DESCRIPTION = 1
W_DIFFICULTY = 2
# A full-name query must beat any mix of per-term field hits.
W_EXACT_NAME_PER_TERM = W_NAME + W_COUNTRY + W_INGREDIENT + W_TAG + W_DESCRIPTION + W_DIFFICULTY

TIME_RANGES = ("quick", "medium", "long")


def score_recipe(recipe: Recipe, terms: Sequence[str]) -> int:
    score = 0
    name = recipe.name_en.lower()
    country = recipe.country.lower()
    country_slug = recipe.country_slug.lower()
    ingredients = recipe.ingredient_names()
    tags = [t.lower() for t in recipe.tags]
    description = recipe.short_description.lower()
    difficulty = recipe.difficulty.lower()

    for term in terms:
        if term in name:
            score += W_NAME
        if term in country or term in country_slug:
            score += W_COUNTRY
        if any(term in i for i in ingredients):
            score += W_INGREDIENT
        if any(term in t for t in tags):
            score += W_TAG
        if term in description:
            score += W_DESCRIPTION
        if term == difficulty:
            score += W_DIFFICULTY

    if terms and " ".join(terms) == " ".join(tokenize(recipe.name_en)):
        score += W_EXACT_NAME_PER_TERM * len(terms)
    return score


def scored_search(recipes: Sequence[Recipe], query: str) -> List[Tuple[Recipe, int]]:
    terms = tokenize(query)
    if not terms:
        return [(r, 0) for r in recipes]
    scored = [(r, score_recipe(r, terms)) for r in recipes]
    scored = [x for x in scored if x[1] > 0]
    # sorted() is stable: ties keep store order
    return sorted(scored, key=lambda x: -x[1])


def search(recipes: Sequence[Recipe], query: str) -> List[Recipe]:
    """Recipes matching `query`, best first. Empty query returns everything."""
    return [r for r, _ in scored_search(recipes, query)]


def _total_time_in_range(recipe: Recipe, time_range: str) -> bool:
    total = recipe.total_time_minutes
    if time_range == "quick":
        return total < 30
    if time_range == "medium":
        return 30 <= total <= 60
    if time_range == "long":
        return total > 60
    return True


def filter_recipes(
    recipes: Sequence[Recipe],
    country: Optional[str] = None,
    difficulty: Optional[str] = None,
    dietary: Optional[str] = None,
    time_range: Optional[str] = None,
    tag: Optional[str] = None,
) -> List[Recipe]:
    results = list(recipes)
    if country:
        results = get_by_country(results, country)
    if difficulty:
        results = [r for r in results if r.difficulty == difficulty.lower()]
    # dietary needs are recorded as tags ("vegan", "gluten-free")
    for t in (dietary, tag):
        if t:
            results = get_by_tag(results, t)
    if time_range:
        results = [r for r in results if _total_time_in_range(r, time_range)]
    return results


def search_and_filter(recipes: Sequence[Recipe], query: str, **filters: Any) -> List[Recipe]:
    results = filter_recipes(recipes, **filters)
    if query and query.strip():
        results = search(results, query)
    return results


def find_by_name(recipes: Sequence[Recipe], name: str) -> Optional[Recipe]:
    needle = (name or "").lower().strip()
    if not needle:
        return None
    slugish = "-".join(needle.split())
    for r in recipes:
        n = r.name_en.lower()
        if n == needle or needle in n or r.slug == slugish:
            return r
    return None


def get_by_country(recipes: Sequence[Recipe], country: str) -> List[Recipe]:
    c = (country or "").strip().lower()
    return [r for r in recipes if r.country.lower() == c or r.country_slug.lower() == c]


def get_by_tag(recipes: Sequence[Recipe], tag: str) -> List[Recipe]:
    t = (tag or "").strip().lower()
    return [r for r in recipes if t in (x.lower() for x in r.tags)]


def get_similar(recipes: Sequence[Recipe], recipe: Recipe, limit: int = 3) -> List[Recipe]:
    scored = []
    own_tags = {t.lower() for t in recipe.tags}
    for r in recipes:
        if r.slug == recipe.slug:
            continue
        similarity = 0
        if r.country_slug == recipe.country_slug:
            similarity += 2
        if r.difficulty == recipe.difficulty:
            similarity += 1
        similarity += len([t for t in r.tags if t.lower() in own_tags])
        scored.append((r, similarity))
    scored.sort(key=lambda x: -x[1])
    return [r for r, _ in scored[:limit]]


def get_random(recipes: Sequence[Recipe], count: int = 3, rng: Optional[random.Random] = None) -> List[Recipe]:
    rng = rng or random.Random()
    pool = list(recipes)
    return rng.sample(pool, min(count, len(pool)))


class _TTLCache:
    def __init__(self, ttl_s: int = 60, max_items: int = 512) -> None:
        self.ttl_s = ttl_s
        self.max_items = max_items
        self._data: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str):
        now = time.time()
        v = self._data.get(key)
        if not v:
            return None
        ts, payload = v
        if now - ts > self.ttl_s:
            self._data.pop(key, None)
            return None
        return payload

    def set(self, key: str, payload: Any) -> None:
        if len(self._data) >= self.max_items:
            # drop oldest
            oldest = sorted(self._data.items(), key=lambda kv: kv[1][0])[: max(1, self.max_items // 10)]
            for k, _ in oldest:
                self._data.pop(k, None)
        self._data[key] = (time.time(), payload)


class RecipeSearchEngine:
    """
    Keyword search over the recipe store.

    Scores every recipe per query term against name, country, ingredients,
    tags, description and difficulty, and caches results of repeated queries
    for a short TTL. The store is read-only so cached lists never go stale.
    """

    def __init__(self, recipe_repo: RecipeReadRepo, cache_ttl_s: int = 60) -> None:
        self.recipe_repo = recipe_repo
        self.recipes = recipe_repo.all()
        self.cache = _TTLCache(ttl_s=cache_ttl_s)
        log.info("RecipeSearchEngine ready | recipes=%d", len(self.recipes))

    def search(self, query: str, top_k: Optional[int] = None) -> List[Recipe]:
        key = " ".join(tokenize(query))
        cached = self.cache.get(key)
        if cached is None:
            cached = search(self.recipes, query)
            self.cache.set(key, cached)
        return list(cached if top_k is None else cached[:top_k])

    def browse(self, query: str = "", **filters: Any) -> List[Recipe]:
        return search_and_filter(self.recipes, query, **filters)

    def by_slug(self, slug: str) -> Optional[Recipe]:
        return self.recipe_repo.by_slug(slug)

    def similar(self, recipe: Recipe, limit: int = 3) -> List[Recipe]:
        return get_similar(self.recipes, recipe, limit=limit)
