# chefsense/chefsense/core/config.py
from __future__ import annotations
from dataclasses import dataclass
import os
import logging


@dataclass(frozen=True)
class Paths:
    ROOT: str = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
    DATA_DIR: str = os.path.join(ROOT, "data")
    RECIPES_JSON: str = os.path.join(ROOT, "data", "recipes.json")
    FAVORITES_JSON: str = os.path.join(ROOT, "data", "favorites.json")


RECIPES_JSON_PATH: str = os.getenv("RECIPES_JSON_PATH", Paths.RECIPES_JSON)
FAVORITES_JSON_PATH: str = os.getenv("FAVORITES_JSON_PATH", Paths.FAVORITES_JSON)

# Perceived-responsiveness pause before a reply; 0 disables it.
RESPONSE_DELAY_MS: int = int(os.getenv("RESPONSE_DELAY_MS", "450"))
SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", "1800"))
SEARCH_CACHE_TTL_S: int = int(os.getenv("SEARCH_CACHE_TTL_S", "60"))

MAX_SWAPS_DISPLAYED: int = int(os.getenv("MAX_SWAPS_DISPLAYED", "3"))
MAX_PANTRY_SUGGESTIONS: int = int(os.getenv("MAX_PANTRY_SUGGESTIONS", "4"))
MAX_SUGGESTIONS: int = int(os.getenv("MAX_SUGGESTIONS", "4"))

HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8081"))

INTENTS = [
    "debug", "greeting", "how_to_make", "ingredients", "dietary_info",
    "nutrition", "substitution", "meal_type", "time", "tips",
    "favorites", "follow_up", "recipe_search", "unknown",
]

MEAL_TYPES = ["Breakfast", "Lunch", "Dinner", "Appetizer", "Dessert", "Drink"]
DIETARY_STYLES = [
    "None", "Vegan", "Vegetarian", "Gluten Free",
    "Dairy Free", "High Protein", "Low Carb",
]
DIFFICULTIES = ["easy", "medium", "hard"]

# Global logging (module-level loggers inherit this)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
