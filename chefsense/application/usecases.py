# =========================
# FILE: chefsense/chefsense/application/usecases.py
# =========================
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from chefsense.domain.repositories import RecipeReadRepo
from chefsense.services.search_engine import RecipeSearchEngine, TIME_RANGES, find_by_name


@dataclass(frozen=True)
class BrowseRecipes:
    search_engine: RecipeSearchEngine

    def __call__(
        self,
        query: str = "",
        country: Optional[str] = None,
        difficulty: Optional[str] = None,
        dietary: Optional[str] = None,
        time_range: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        if time_range and time_range not in TIME_RANGES:
            raise ValueError(f"time_range must be one of {', '.join(TIME_RANGES)}")
        results = self.search_engine.browse(
            query,
            country=country,
            difficulty=difficulty,
            dietary=dietary,
            time_range=time_range,
            tag=tag,
        )
        return [r.to_summary() for r in results]


#: recipe detail (full steps/ingredients)
@dataclass(frozen=True)
class GetRecipeDetail:
    recipe_repo: RecipeReadRepo

    def __call__(self, slug_or_name: str) -> Dict[str, Any]:
        key = (slug_or_name or "").strip()
        if not key:
            raise ValueError("slug_or_name is required")

        by_slug = self.recipe_repo.by_slug(key)
        if by_slug:
            return by_slug.to_dict()

        # fallback: name contains (cheap + OK for a small store)
        by_name = find_by_name(self.recipe_repo.all(), key)
        if by_name:
            return by_name.to_dict()
        raise LookupError(f"Recipe not found: {slug_or_name}")


@dataclass(frozen=True)
class FindSimilarRecipes:
    search_engine: RecipeSearchEngine

    def __call__(self, slug: str, limit: int = 3) -> List[Dict[str, Any]]:
        recipe = self.search_engine.by_slug(slug)
        if recipe is None:
            raise LookupError(f"Recipe not found: {slug}")
        return [r.to_summary() for r in self.search_engine.similar(recipe, limit=limit)]
