# chefsense/chefsense/application/response_composer.py
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Sequence

from chefsense.application import response_templates as rt
from chefsense.application.nutrition_advisor import (
    get_allergens,
    get_health_advice,
    get_healthy_swaps,
    swaps_for_ingredient,
)
from chefsense.domain.entities import Recipe
from chefsense.domain.markup import card_for, link_for
from chefsense.services.pantry_matcher import PantryMatch
from chefsense.services.text_normalizer import first_clause

_DIET_STYLE_FOR_ASPECT = {
    "vegan": ("Vegan",),
    "vegetarian": ("Vegan", "Vegetarian"),
    "gluten-free": ("Gluten Free",),
    "dairy-free": ("Dairy Free", "Vegan"),
    "low-carb": ("Low Carb",),
    "high-protein": ("High Protein",),
}
# aspect -> allergen that rules it out
_ALLERGEN_FOR_ASPECT = {"gluten-free": "gluten", "dairy-free": "dairy", "nut-free": "tree nuts"}
_MEAT_WORDS = ("chicken", "beef", "lamb", "pork", "bacon", "fish", "shrimp", "prawn", "turkey", "tuna", "salmon", "anchov")
_ANIMAL_WORDS = _MEAT_WORDS + ("egg", "milk", "butter", "cheese", "cream", "yogurt", "ghee", "honey")


def _fmt_num(x: float) -> str:
    return str(int(x)) if float(x).is_integer() else f"{x:g}"


class ResponseComposer:
    """
    Builds assistant replies from recipe facts and the active language pack.

    Replies are markdown-ish text; recipe references are emitted only as
    RECIPE_LINK / RECIPE_CARD directives.
    """

    def __init__(
        self,
        max_swaps: int = 3,
        max_suggestions: int = 4,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.max_swaps = max_swaps
        self.max_suggestions = max_suggestions
        self.rng = rng

    # ---------- social ----------
    def welcome(self, recipe_count: int) -> str:
        return rt.welcome_reply(recipe_count)

    def unavailable(self) -> str:
        return rt.UNAVAILABLE_MESSAGE

    def greet(self, lang: str = "en") -> str:
        return rt.greet_reply(lang, self.rng)

    def help(self, lang: str = "en") -> str:
        return rt.help_reply(lang)

    def clarify_recipe(self, lang: str = "en") -> str:
        return rt.get_lang_pack(lang)["whichRecipe"]

    # ---------- sections ----------
    def identity_block(self, recipe: Recipe) -> str:
        line = (
            f"🌍 {recipe.country} • 🍽️ {recipe.meal_type} • ⏱️ {recipe.total_time_minutes} min"
            f" • 📊 {recipe.difficulty}"
        )
        if recipe.dietary_style and recipe.dietary_style != "None":
            line += f" • 🥗 {recipe.dietary_style}"
        return f"### {recipe.name_en}\n{line}\n"

    def generic_steps(self, message: str) -> List[str]:
        focus = first_clause(message) or "your dish"
        return [
            f"Gather the core ingredients for {focus} and keep a clean station ready.",
            "Preheat, chop, and season early so cooking stays smooth.",
            "Cook with gentle heat, taste often, and finish with fresh herbs or citrus.",
        ]

    def steps_section(self, steps: Sequence[str], pack: Dict[str, str], title: Optional[str] = None) -> str:
        out = f"### {title or pack['stepsTitle']}:\n"
        for i, step in enumerate(steps, start=1):
            out += f"{i}. {step}\n"
        return out

    def nutrition_notes(self, recipe: Optional[Recipe], pack: Dict[str, str]) -> str:
        lines: List[str] = []
        if recipe is not None and recipe.nutrition is not None:
            n = recipe.nutrition
            lines.extend([
                f"• 🔥 {pack['calories']}: **{_fmt_num(n.per_serving_kcal)} kcal** per serving",
                f"• 🥩 {pack['protein']}: **{_fmt_num(n.protein_g)}g**",
                f"• 🍞 {pack['carbs']}: **{_fmt_num(n.carbs_g)}g**",
                f"• 🧈 {pack['fat']}: **{_fmt_num(n.fat_g)}g**",
            ])
        else:
            lines.append(f"• {pack['fallbackNutrition']}")
        lines.append(f"• 💡 {get_health_advice(recipe)}")
        return "\n".join(lines)

    def allergen_notes(self, recipe: Optional[Recipe], pack: Dict[str, str]) -> str:
        allergens = get_allergens(recipe)
        if not allergens:
            return f"• {pack['noAllergens']}"
        return f"• ⚠️ {pack['contains']}: **{', '.join(allergens)}**"

    def swaps_lines(self, recipe: Optional[Recipe]) -> List[str]:
        return get_healthy_swaps(recipe)[: self.max_swaps]

    def suggestion_cards(self, recipes: Sequence[Recipe]) -> str:
        return "\n".join(card_for(r) for r in list(recipes)[: self.max_suggestions])

    # ---------- full replies ----------
    def structured_reply(
        self,
        message: str,
        recipe: Optional[Recipe],
        lang: str,
        suggestions: Sequence[Recipe] = (),
    ) -> str:
        pack = rt.get_lang_pack(lang)
        steps = list(recipe.steps) if recipe is not None and recipe.steps else self.generic_steps(message)

        response = f"{pack['greeting']}\n\n"
        if recipe is not None:
            response += self.identity_block(recipe) + "\n"
        response += self.steps_section(steps, pack)
        response += f"\n### {pack['nutritionTitle']}:\n{self.nutrition_notes(recipe, pack)}\n"
        response += f"\n### {pack['allergenTitle']}:\n{self.allergen_notes(recipe, pack)}\n"

        swaps = self.swaps_lines(recipe)
        if swaps:
            response += f"\n### {pack['swapsTitle']}:\n" + "".join(f"{s}\n" for s in swaps)

        cards = self.suggestion_cards(suggestions)
        if cards:
            response += f"\n### {pack['suggestionsTitle']}:\n{cards}\n"

        response += f"\n{pack['askClarify']}"
        return response

    def pantry_reply(self, tokens: Sequence[str], matches: Sequence[PantryMatch], lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        best = matches[0].recipe

        response = f"{pack['pantryIntro']} **{', '.join(tokens)}**! 🎉\n\n"
        response += f"### {pack['pantryMatchesTitle']}:\n"
        for index, match in enumerate(matches):
            r = match.recipe
            best_label = f" ⭐ {pack['bestMatch']}" if index == 0 else ""
            response += f"**{index + 1}. {r.name_en}** ({r.country}){best_label}\n"
            response += f"   ⏱️ {r.total_time_minutes} min • 📊 {r.difficulty}"
            if r.nutrition is not None:
                response += f" • 🔥 {_fmt_num(r.nutrition.per_serving_kcal)} kcal"
            response += "\n"
            if match.matched_ingredients:
                response += f"   {pack['uses']}: {', '.join(match.matched_ingredients)}\n"
            response += f"   {link_for(r, pack['viewRecipe'])}\n\n"

        response += self.steps_section(best.steps, pack, title=f"{pack['stepsTitle']} for {best.name_en}")
        response += f"\n### {pack['nutritionTitle']}:\n{self.nutrition_notes(best, pack)}\n"
        response += f"\n### {pack['allergenTitle']}:\n{self.allergen_notes(best, pack)}\n"
        swaps = self.swaps_lines(best)
        if swaps:
            response += f"\n### {pack['swapsTitle']}:\n" + "".join(f"{s}\n" for s in swaps)
        response += f"\n{pack['askClarify']}"
        return response

    def pantry_fallback(self, tokens: Sequence[str], lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        generic_idea = [
            "1. Stir-fry aromatics, add your protein, then fold in grains or legumes.",
            "2. Season with spices you enjoy, add a splash of stock or water to bring it together.",
            "3. Finish with herbs, lemon, or yogurt for freshness.",
        ]
        response = f"{pack['pantryIntro']} {', '.join(tokens)}, but {pack['noMatches']}\n\n"
        response += f"### {pack['stepsTitle']}:\n" + "\n".join(generic_idea) + "\n\n"
        response += f"### {pack['nutritionTitle']}:\n"
        response += f"{pack['nutritionSummaryLead']}: {get_health_advice(None)}\n"
        response += "Allergen watch: if your list includes nuts, dairy, eggs, or wheat, keep substitutions handy.\n"
        response += pack["askClarify"]
        return response

    def ingredients_reply(self, recipe: Recipe, lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        response = self.identity_block(recipe)
        response += f"{pack['serves']}: {recipe.servings}\n\n"
        response += f"### {pack['ingredientsTitle']}:\n"
        response += "".join(f"• {i.describe()}\n" for i in recipe.ingredients)
        response += f"\n### {pack['allergenTitle']}:\n{self.allergen_notes(recipe, pack)}\n"
        response += f"\n{link_for(recipe, pack['viewRecipe'])}"
        return response

    def nutrition_reply(self, recipe: Recipe, lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        response = self.identity_block(recipe)
        response += f"\n### {pack['nutritionTitle']}:\n{self.nutrition_notes(recipe, pack)}\n"
        response += f"\n### {pack['allergenTitle']}:\n{self.allergen_notes(recipe, pack)}\n"
        response += f"\n{pack['askClarify']}"
        return response

    def dietary_reply(self, recipe: Recipe, aspect: str, lang: str, item: Optional[str] = None) -> str:
        pack = rt.get_lang_pack(lang)
        if aspect == "calories":
            return self.nutrition_reply(recipe, lang)

        verdict, reason = self._dietary_verdict(recipe, aspect, item)
        response = f"{pack['yes'] if verdict else pack['no']} {reason}\n\n"
        response += self.identity_block(recipe)
        response += f"\n### {pack['allergenTitle']}:\n{self.allergen_notes(recipe, pack)}\n"
        if not verdict:
            swaps = self.swaps_lines(recipe)
            if swaps:
                response += f"\n### {pack['swapsTitle']}:\n" + "".join(f"{s}\n" for s in swaps)
        response += f"\n{pack['askClarify']}"
        return response

    def _dietary_verdict(self, recipe: Recipe, aspect: str, item: Optional[str]) -> tuple[bool, str]:
        names = recipe.ingredient_names()
        tags = [t.lower() for t in recipe.tags]
        if aspect == "contains" and item:
            hit = any(item in n for n in names) or item in get_allergens(recipe)
            return hit, (
                f"{recipe.name_en} contains {item}." if hit else f"I don't see {item} in {recipe.name_en}."
            )
        styles = _DIET_STYLE_FOR_ASPECT.get(aspect, ())
        if recipe.dietary_style in styles or aspect in tags:
            return True, f"{recipe.name_en} is {aspect.replace('-', ' ')}."
        allergen = _ALLERGEN_FOR_ASPECT.get(aspect)
        if allergen is not None:
            if allergen in get_allergens(recipe):
                return False, f"{recipe.name_en} contains {allergen}."
            return True, f"No {allergen} ingredients spotted in {recipe.name_en}, but double-check labels."
        if aspect == "vegetarian":
            if any(w in n for n in names for w in _MEAT_WORDS):
                return False, f"{recipe.name_en} includes meat or fish."
            return True, f"{recipe.name_en} has no meat or fish in its ingredient list."
        if aspect == "vegan":
            if any(w in n for n in names for w in _ANIMAL_WORDS):
                return False, f"{recipe.name_en} uses animal products."
            return True, f"{recipe.name_en} has no animal products in its ingredient list."
        return False, f"{recipe.name_en} isn't marked as {aspect.replace('-', ' ')}."

    def substitution_reply(self, recipe: Optional[Recipe], message: str, lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        specific = swaps_for_ingredient(message)
        swaps = specific[: self.max_swaps] if specific else self.swaps_lines(recipe)
        response = ""
        if recipe is not None and not specific:
            response += self.identity_block(recipe) + "\n"
        response += f"### {pack['swapsTitle']}:\n" + "".join(f"{s}\n" for s in swaps)
        response += f"\n{pack['askClarify']}"
        return response

    def recipe_list_reply(self, heading: str, recipes: Sequence[Recipe], lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        if not recipes:
            return f"{pack['noMatches']}\n\n{self.help(lang)}"
        response = f"### {heading} · {pack['suggestionsTitle']}:\n"
        response += self.suggestion_cards(recipes) + "\n"
        response += f"\n{pack['askClarify']}"
        return response

    def time_reply(self, recipe: Recipe, lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        response = self.identity_block(recipe)
        response += f"\n### {pack['timeTitle']}:\n"
        response += f"• ⏱️ {pack['totalTime']}: **{recipe.total_time_minutes} {pack['minutes']}**"
        response += f" ({recipe.prep_time_minutes} {pack['minutes']} {pack['prep']}"
        response += f" + {recipe.cooking_time_minutes} {pack['minutes']} {pack['cook']})\n"
        response += f"• {pack['serves']}: {recipe.servings}\n"
        response += f"\n{pack['askClarify']}"
        return response

    def tips_reply(self, recipe: Optional[Recipe], lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        response = ""
        if recipe is not None:
            response += self.identity_block(recipe) + "\n"
            tips = list(recipe.cooking_tips) or [pack["noTips"]]
        else:
            tips = list(rt.GENERIC_TIPS)
        response += f"### {pack['tipsTitle']}:\n" + "".join(f"• 💡 {t}\n" for t in tips)
        if recipe is not None and recipe.nutrition_benefits:
            response += f"\n### {pack['nutritionSummaryLead']}:\n"
            response += "".join(f"• {b}\n" for b in recipe.nutrition_benefits)
        response += f"\n{pack['askClarify']}"
        return response

    def favorites_reply(self, recipes: Sequence[Recipe], lang: str) -> str:
        pack = rt.get_lang_pack(lang)
        if not recipes:
            return pack["noFavorites"]
        response = f"### ❤️ {pack['favoritesTitle']}:\n"
        response += "\n".join(card_for(r) for r in recipes) + "\n"
        response += f"\n{pack['askClarify']}"
        return response

    def follow_up_reply(self, recipe: Recipe, lang: str, suggestions: Sequence[Recipe] = ()) -> str:
        pack = rt.get_lang_pack(lang)
        response = self.identity_block(recipe)
        if recipe.short_description:
            response += f"{recipe.short_description}\n"
        response += f"\n{link_for(recipe, pack['viewRecipe'])}\n"
        cards = self.suggestion_cards(suggestions)
        if cards:
            response += f"\n### {pack['suggestionsTitle']}:\n{cards}\n"
        response += f"\n{pack['askClarify']}"
        return response

    def debug_summary(self, info: Optional[Dict[str, Any]]) -> str:
        if not info or not info.get("last_message"):
            return "Debug summary: no prior user query captured yet."
        names = ", ".join(info.get("matched_names") or []) or "none"
        tokens = ", ".join(info.get("ingredient_tokens") or []) or "none"
        path = "Pantry mode" if info.get("pantry_mode") else "Standard recipe guidance"
        return "\n".join([
            "Debug summary (last request):",
            f'• Message: "{info["last_message"]}"',
            f"• Detected language: {info.get('lang')}",
            f"• Path: {path}",
            f"• Intent: {info.get('intent') or 'pantry'}",
            f"• Ingredient tokens: {tokens}",
            f"• Matched recipes: {info.get('matched_count', 0)} ({names})",
            f"• Active recipe: {info.get('last_recipe') or 'none'}",
        ])
