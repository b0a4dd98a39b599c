# =========================
# FILE: chefsense/chefsense/application/rule_engine.py
# (ordered intent rules: first match wins)
# =========================
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

_RE_DEBUG = re.compile(r"^\s*/debug\s+last\b", re.IGNORECASE)
_RE_GREET = re.compile(
    r"^\s*(hello|hi|hey|hiya|howdy|greetings|good\s+(?:morning|afternoon|evening)|"
    r"bonjour|bonsoir|salut|hallo|hoi|goedemorgen|مرحبا|أهلا|اهلا|السلام)\b",
    re.IGNORECASE,
)
_RE_HOW_TO_MAKE = re.compile(
    r"\bhow\s+(?:do|can|should|would|to)\s+(?:i\s+|you\s+|we\s+|one\s+)?(?:make|cook|prepare|bake)\b|"
    r"\b(?:steps|instructions|directions)\s+(?:for|to|of)\b|"
    r"\b(?:walk\s+me\s+through|recipe\s+for)\b",
    re.IGNORECASE,
)
_RE_INGREDIENTS = re.compile(
    r"\bwhat\s+(?:are\s+the\s+)?ingredients\b|\bwhat\s+do\s+i\s+need\b|"
    r"\bingredients?\s+(?:for|of|in|list)\b|\bwhat(?:'s|\s+is|\s+goes)\s+in\b",
    re.IGNORECASE,
)
_RE_DIET_WORD = re.compile(
    r"\b(vegan|vegetarian|gluten[-\s]?free|dairy[-\s]?free|nut[-\s]?free|halal|keto|"
    r"low[-\s]?carb|high[-\s]?protein|spicy)\b",
    re.IGNORECASE,
)
_RE_DIETARY_QUESTION = re.compile(r"^\s*(?:is|are|does|do|can|will)\b", re.IGNORECASE)
_RE_CONTAINS = re.compile(r"\b(?:contain|contains|have|has)\s+(\w+)", re.IGNORECASE)
_RE_CALORIES_IN = re.compile(r"\bhow\s+many\s+calories\s+(?:are\s+|is\s+)?(?:in|does|do)\b", re.IGNORECASE)
_RE_NUTRITION = re.compile(
    r"\b(calories?|kcal|protein|carbs?|carbohydrates?|fats?|nutrition(?:al)?|nutrients?|"
    r"healthy|healthier|health|macros?)\b",
    re.IGNORECASE,
)
_RE_SUBSTITUTION = re.compile(
    r"\b(substitut\w*|replace\w*|alternatives?|instead\s+of|swap\w*)\b", re.IGNORECASE
)
_RE_MEAL_TYPE = re.compile(
    r"\b(breakfast|brunch|lunch|dinner|supper|desserts?|snacks?|drinks?|beverages?|"
    r"appetizers?|starters?)\b",
    re.IGNORECASE,
)
_RE_TIME = re.compile(
    r"\bhow\s+long\b|\bhow\s+much\s+time\b|\bminutes?\b|\bduration\b|\bquick(?:ly)?\b|\bfast\b",
    re.IGNORECASE,
)
_RE_TIPS = re.compile(r"\b(tips?|tricks?|advice|secrets?|hints?)\b", re.IGNORECASE)
_RE_FAVORITES = re.compile(r"\b(favou?rites?|saved|bookmark(?:ed|s)?)\b", re.IGNORECASE)
_RE_FOLLOW_UP = re.compile(r"^\s*(and|also|plus|what\s+about|how\s+about)\b", re.IGNORECASE)
_RE_RECIPE_SEARCH = re.compile(
    r"\b(what|which|show|find|give|suggest|recommend|any)\b.*\b(recipes?|dish(?:es)?|meals?|food|options?|ideas?)\b",
    re.IGNORECASE,
)

_MEAL_TYPE_MAP = {
    "breakfast": "Breakfast", "brunch": "Breakfast",
    "lunch": "Lunch",
    "dinner": "Dinner", "supper": "Dinner",
    "dessert": "Dessert", "desserts": "Dessert",
    "snack": "Appetizer", "snacks": "Appetizer",
    "appetizer": "Appetizer", "appetizers": "Appetizer",
    "starter": "Appetizer", "starters": "Appetizer",
    "drink": "Drink", "drinks": "Drink", "beverage": "Drink", "beverages": "Drink",
}

SearchProbe = Callable[[str], bool]


@dataclass(frozen=True)
class RuleResult:
    intent: str
    payload: Dict[str, Any] = field(default_factory=dict)


Predicate = Callable[[str, bool], Optional[Dict[str, Any]]]


def _match(pattern: "re.Pattern[str]") -> Predicate:
    def pred(t: str, has_recipe: bool) -> Optional[Dict[str, Any]]:
        return {} if pattern.search(t) else None
    return pred


def _dietary_info(t: str, has_recipe: bool) -> Optional[Dict[str, Any]]:
    if _RE_CALORIES_IN.search(t):
        return {"aspect": "calories"}
    # "do you have any vegan recipes?" asks for a list, not about one dish
    if _RE_RECIPE_SEARCH.search(t):
        return None
    if not _RE_DIETARY_QUESTION.search(t):
        return None
    m = _RE_DIET_WORD.search(t)
    if m:
        return {"aspect": re.sub(r"[-\s]+", "-", m.group(1).lower())}
    m = _RE_CONTAINS.search(t)
    if m:
        return {"aspect": "contains", "item": m.group(1).lower()}
    return None


def _meal_type(t: str, has_recipe: bool) -> Optional[Dict[str, Any]]:
    m = _RE_MEAL_TYPE.search(t)
    if not m:
        return None
    return {"meal_type": _MEAL_TYPE_MAP[m.group(1).lower()]}


def _follow_up(t: str, has_recipe: bool) -> Optional[Dict[str, Any]]:
    return {} if has_recipe and _RE_FOLLOW_UP.search(t) else None


def detect_meal_type(text: str) -> Optional[str]:
    m = _RE_MEAL_TYPE.search(text or "")
    return _MEAL_TYPE_MAP[m.group(1).lower()] if m else None


class RuleEngine:
    """
    Maps a message to exactly one intent.

    Rules are evaluated in the order of `INTENT_ORDER`; the first predicate
    that matches wins, so narrow intents ("how do I make ...") sit before
    broad ones (recipe search). The result depends only on the message,
    whether a current recipe is set and the (read-only) search probe.
    """

    def __init__(self, search_probe: Optional[SearchProbe] = None) -> None:
        self.search_probe = search_probe
        self.rules: List[Tuple[str, Predicate]] = [
            ("debug", _match(_RE_DEBUG)),
            ("greeting", _match(_RE_GREET)),
            ("how_to_make", _match(_RE_HOW_TO_MAKE)),
            ("ingredients", _match(_RE_INGREDIENTS)),
            ("dietary_info", _dietary_info),
            ("nutrition", _match(_RE_NUTRITION)),
            ("substitution", _match(_RE_SUBSTITUTION)),
            ("meal_type", _meal_type),
            ("time", _match(_RE_TIME)),
            ("tips", _match(_RE_TIPS)),
            ("favorites", _match(_RE_FAVORITES)),
            ("follow_up", _follow_up),
            ("recipe_search", self._recipe_search),
        ]

    @property
    def intent_order(self) -> List[str]:
        return [name for name, _ in self.rules] + ["unknown"]

    def _recipe_search(self, t: str, has_recipe: bool) -> Optional[Dict[str, Any]]:
        if _RE_RECIPE_SEARCH.search(t):
            return {}
        if self.search_probe is not None and self.search_probe(t):
            return {"probe": True}
        return None

    def classify(self, text: str, has_current_recipe: bool = False) -> RuleResult:
        t = (text or "").strip().lower()
        if not t:
            return RuleResult("unknown", {})
        for intent, pred in self.rules:
            payload = pred(t, has_current_recipe)
            if payload is not None:
                return RuleResult(intent, payload)
        return RuleResult("unknown", {})


INTENT_ORDER = RuleEngine().intent_order
