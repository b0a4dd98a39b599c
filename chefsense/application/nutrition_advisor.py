# chefsense/chefsense/application/nutrition_advisor.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from chefsense.domain.entities import Recipe

_EGG = re.compile(r"\beggs?\b")

# (allergen label, predicate over one lower-cased ingredient name)
ALLERGEN_RULES: List[Tuple[str, Callable[[str], bool]]] = [
    ("gluten", lambda i: bool(re.search(r"flour|wheat|bread|pasta|noodle|couscous|bulgur|semolina", i))),
    ("dairy", lambda i: bool(re.search(r"milk|butter|cheese|yogurt|yoghurt|cream|ghee", i))
        and not re.search(r"coconut|peanut butter|(?:almond|oat|soy) milk", i)),
    ("eggs", lambda i: bool(_EGG.search(i)) and "eggplant" not in i),
    ("tree nuts", lambda i: bool(re.search(r"peanut|almond|walnut|cashew|pistachio|hazelnut|pecan|\bnuts?\b", i))),
    ("soy", lambda i: bool(re.search(r"soy|tofu|tempeh|edamame|miso", i))),
    ("shellfish", lambda i: bool(re.search(r"shrimp|prawn|crab|lobster|shellfish|mussel|clam|oyster", i))),
    ("fish", lambda i: bool(re.search(r"fish|salmon|tuna|anchov|cod\b|sardine", i))),
    ("sesame", lambda i: "sesame" in i or "tahini" in i),
]


@dataclass(frozen=True)
class SwapRule:
    key: str
    pattern: "re.Pattern[str]"
    suggestion: str
    exclude: Optional["re.Pattern[str]"] = None

    def applies(self, ingredient: str) -> bool:
        if not self.pattern.search(ingredient):
            return False
        return self.exclude is None or not self.exclude.search(ingredient)


SWAP_RULES: List[SwapRule] = [
    SwapRule("butter", re.compile(r"butter"), "🧈→🫒 Butter → olive oil or avocado (healthier fats)",
             exclude=re.compile(r"peanut butter")),
    SwapRule("cream", re.compile(r"cream"), "🥛→🥣 Cream → coconut milk or cashew cream (dairy-free)"),
    SwapRule("sugar", re.compile(r"sugar"), "🍬→🍯 Sugar → honey, maple syrup, or dates (natural sweetness)"),
    SwapRule("white rice", re.compile(r"white rice"),
             "🍚→🌾 White rice → cauliflower rice (low-carb) or quinoa (more protein)"),
    SwapRule("pasta", re.compile(r"pasta|spaghetti|penne"),
             "🍝→🌾 Regular pasta → whole wheat or chickpea pasta (gluten-free option)"),
    SwapRule("flour", re.compile(r"flour"), "🌾→🥥 White flour → almond flour or oat flour (gluten-free options)",
             exclude=re.compile(r"whole")),
    SwapRule("red meat", re.compile(r"beef|lamb"), "🥩→🍗 Red meat → chicken, turkey, or tofu (leaner protein)"),
    SwapRule("salt", re.compile(r"salt"), "🧂→🌿 Salt → herbs & lemon zest (reduce sodium, boost flavor)"),
    SwapRule("vegetable oil", re.compile(r"(?:vegetable|canola).*oil|oil.*(?:vegetable|canola)"),
             "🛢️→🫒 Vegetable oil → extra virgin olive oil (better fats)"),
]

GENERIC_SWAPS = [
    "🧈→🫒 Butter → olive oil (heart-healthy fats)",
    "🥛→🥣 Heavy cream → Greek yogurt (less fat, more protein)",
    "🍚→🌾 White rice → quinoa or brown rice (more fiber)",
    "🍝→🥒 Pasta → zucchini noodles (low-carb option)",
]
HEALTHY_ALREADY = "💡 This recipe looks pretty healthy! Minor tweaks: use less salt, add more veggies."
GENERIC_HEALTH_ADVICE = "Pro tip: Fill half your plate with veggies, add lean protein, and choose whole grains!"


def get_allergens(recipe: Optional[Recipe]) -> List[str]:
    if recipe is None:
        return []
    names = recipe.ingredient_names()
    return [label for label, hit in ALLERGEN_RULES if any(hit(n) for n in names)]


def get_healthy_swaps(recipe: Optional[Recipe]) -> List[str]:
    if recipe is None:
        return list(GENERIC_SWAPS)
    names = recipe.ingredient_names()
    swaps = [rule.suggestion for rule in SWAP_RULES if any(rule.applies(n) for n in names)]
    return swaps or [HEALTHY_ALREADY]


def swaps_for_ingredient(text: str) -> List[str]:
    """Swap suggestions whose rule matches a free-text ingredient mention."""
    t = (text or "").lower()
    return [
        rule.suggestion
        for rule in SWAP_RULES
        if rule.applies(t) or (rule.key in t and rule.exclude is None)
    ]


def get_health_advice(recipe: Optional[Recipe]) -> str:
    if recipe is None or recipe.nutrition is None:
        return GENERIC_HEALTH_ADVICE

    notes: List[str] = []
    kcal = recipe.nutrition.per_serving_kcal
    if kcal >= 750:
        notes.append("Rich dish! Share or pair with a light salad.")
    elif kcal >= 450:
        notes.append("Good energy! Add some veggies on the side.")
    else:
        notes.append("Light & fresh! Great for a starter or add protein.")

    protein = recipe.nutrition.protein_g
    if protein >= 25:
        notes.append("Great for muscle recovery!")
    elif protein < 12:
        notes.append("Tip: Add beans or eggs for more protein.")

    if any(re.search(r"vegetarian|vegan", t, re.IGNORECASE) for t in recipe.tags):
        notes.append("Plant-based goodness!")
    return " ".join(notes)
