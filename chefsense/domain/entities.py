# chefsense/chefsense/domain/entities.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Ingredient:
    name: str
    amount: float | int | str | None = None
    unit: str | None = None

    def describe(self) -> str:
        parts = [str(p) for p in (self.amount, self.unit, self.name) if p not in (None, "")]
        return " ".join(parts)


@dataclass(frozen=True)
class Nutrition:
    per_serving_kcal: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class Recipe:
    slug: str
    name_en: str
    name_local: str
    country: str
    country_slug: str
    meal_type: str
    dietary_style: str
    difficulty: str
    short_description: str
    ingredients: List[Ingredient]
    steps: List[str]
    prep_time_minutes: int
    cooking_time_minutes: int
    servings: int
    tags: List[str] = field(default_factory=list)
    cooking_tips: List[str] = field(default_factory=list)
    nutrition_benefits: List[str] = field(default_factory=list)
    nutrition: Optional[Nutrition] = None

    @property
    def total_time_minutes(self) -> int:
        return self.prep_time_minutes + self.cooking_time_minutes

    @property
    def is_cookable(self) -> bool:
        return bool(self.ingredients) and bool(self.steps)

    def ingredient_names(self) -> List[str]:
        return [i.name.lower() for i in self.ingredients]

    def to_summary(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "name_en": self.name_en,
            "country": self.country,
            "mealType": self.meal_type,
            "dietaryStyle": self.dietary_style,
            "difficulty": self.difficulty,
            "total_time_minutes": self.total_time_minutes,
        }

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "slug": self.slug,
            "name_en": self.name_en,
            "name_local": self.name_local,
            "country": self.country,
            "country_slug": self.country_slug,
            "mealType": self.meal_type,
            "dietaryStyle": self.dietary_style,
            "difficulty": self.difficulty,
            "tags": list(self.tags),
            "short_description": self.short_description,
            "ingredients": [
                {"name": i.name, "amount": i.amount, "unit": i.unit} for i in self.ingredients
            ],
            "steps": list(self.steps),
            "cooking_tips": list(self.cooking_tips),
            "nutrition_benefits": list(self.nutrition_benefits),
            "prep_time_minutes": self.prep_time_minutes,
            "cooking_time_minutes": self.cooking_time_minutes,
            "total_time_minutes": self.total_time_minutes,
            "servings": self.servings,
            "nutrition": None,
        }
        if self.nutrition is not None:
            out["nutrition"] = {
                "per_serving_kcal": self.nutrition.per_serving_kcal,
                "protein_g": self.nutrition.protein_g,
                "carbs_g": self.nutrition.carbs_g,
                "fat_g": self.nutrition.fat_g,
            }
        return out


@dataclass(frozen=True)
class ConversationTurn:
    role: str  # "user" | "assistant" | "system"
    content: str
    lang: str = "en"
    debug: bool = False
