# =========================
# FILE: chefsense/chefsense/application/dialogue_manager.py
# (pantry gate first, then ordered intent rules; state committed after reply)
# =========================
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import anyio

from chefsense.application import response_templates as rt
from chefsense.application.response_composer import ResponseComposer
from chefsense.application.rule_engine import RuleEngine, RuleResult
from chefsense.application.voice import speech_text
from chefsense.domain.entities import Recipe
from chefsense.domain.markup import RecipeCard, parse_directives
from chefsense.domain.repositories import FavoritesReader, RecipeReadRepo
from chefsense.infrastructure.session_store import InMemorySessionStore, SessionState
from chefsense.services.fuzzy_matcher import FuzzyRecipeMatcher
from chefsense.services.pantry_matcher import (
    DIET_WORDS,
    diet_compatible,
    extract_context_hints,
    find_matches_by_ingredients,
    is_pantry_query,
)
from chefsense.services.search_engine import RecipeSearchEngine, get_random
from chefsense.services.text_normalizer import content_terms, extract_ingredient_tokens, search_terms

log = logging.getLogger("app.dialogue_manager")


@dataclass
class _Turn:
    reply: str
    recipe: Optional[Recipe] = None  # becomes the current recipe when set
    results: List[Recipe] = field(default_factory=list)


class DialogueManager:
    def __init__(
        self,
        sessions: InMemorySessionStore,
        recipe_repo: RecipeReadRepo,
        search_engine: Optional[RecipeSearchEngine] = None,
        favorites: Optional[FavoritesReader] = None,
        composer: Optional[ResponseComposer] = None,
        rule_engine: Optional[RuleEngine] = None,
        fuzzy: Optional[FuzzyRecipeMatcher] = None,
        response_delay_s: float = 0.0,
        max_pantry_suggestions: int = 4,
    ) -> None:
        self.sessions = sessions
        self.recipe_repo = recipe_repo
        self.recipes = recipe_repo.all()
        self.search_engine = search_engine or RecipeSearchEngine(recipe_repo)
        self.favorites = favorites
        self.composer = composer or ResponseComposer()
        self.rules = rule_engine or RuleEngine(search_probe=self._has_search_hit)
        self.fuzzy = fuzzy or FuzzyRecipeMatcher(self.recipes)
        self.response_delay_s = response_delay_s
        self.max_pantry_suggestions = max_pantry_suggestions

        self._handlers: Dict[str, Callable[[str, RuleResult, SessionState, str], _Turn]] = {
            "greeting": self._on_greeting,
            "how_to_make": self._on_how_to_make,
            "ingredients": self._on_ingredients,
            "dietary_info": self._on_dietary_info,
            "nutrition": self._on_nutrition,
            "substitution": self._on_substitution,
            "meal_type": self._on_meal_type,
            "time": self._on_time,
            "tips": self._on_tips,
            "favorites": self._on_favorites,
            "follow_up": self._on_follow_up,
            "recipe_search": self._on_recipe_search,
            "unknown": self._on_unknown,
        }

    @property
    def available(self) -> bool:
        return bool(self.recipes)

    # ------------------------------------------------------------------
    # session lifecycle
    # ------------------------------------------------------------------
    def open_session(self, session_id: str) -> Dict[str, Any]:
        st = self.sessions.get_or_create(session_id)
        if not self.available:
            reply, role = self.composer.unavailable(), "system"
        else:
            reply, role = self.composer.welcome(len(self.recipes)), "assistant"
        if not st.opened:
            st.opened = True
            st.append(role, reply, "en")
        self.sessions.save(st)
        return {
            "session_id": session_id,
            "reply": reply,
            "role": role,
            "available": self.available,
            "context": self._context_view(st),
        }

    async def handle(self, session_id: str, text: str, source: str = "text") -> Dict[str, Any]:
        st = self.sessions.get_or_create(session_id)
        message = (text or "").strip()

        if not self.available:
            # the unavailable notice was already shown when the session opened
            return self._notice(st, self.composer.unavailable(), role="system", available=False)
        if not message or st.is_loading:
            return self._notice(st, "", ignored=True)

        st.is_loading = True
        try:
            if self.response_delay_s > 0:
                await anyio.sleep(self.response_delay_s)
            try:
                out = self._process(st, message)
            except Exception:
                log.exception("Failed to answer message session=%s", session_id)
                lang = rt.detect_language(message)
                out = self._notice(st, rt.get_lang_pack(lang)["askClarify"], lang=lang)
        finally:
            st.is_loading = False
            self.sessions.save(st)
        out["source"] = source
        return out

    # ------------------------------------------------------------------
    # processing
    # ------------------------------------------------------------------
    def _process(self, st: SessionState, message: str) -> Dict[str, Any]:
        rule = self.rules.classify(message, st.has_current_recipe)
        if rule.intent == "debug":
            reply = self.composer.debug_summary(st.last_analysis)
            st.append("assistant", reply, "en", debug=True)
            return self._out(st, reply, intent="debug", lang="en", results=[])

        lang = rt.detect_language(message)
        tokens = extract_ingredient_tokens(message)
        pantry_mode = is_pantry_query(message, tokens)

        if pantry_mode:
            intent = "pantry"
            turn = self._on_pantry(message, tokens, lang)
        else:
            intent = rule.intent
            turn = self._handlers[intent](message, rule, st, lang)

        log.info(
            "route intent=%s lang=%s pantry=%s results=%d recipe=%s",
            intent, lang, pantry_mode, len(turn.results), turn.recipe.slug if turn.recipe else None,
        )

        # commit state only once the reply exists
        st.detected_language = lang
        st.append("user", message, lang)
        st.append("assistant", turn.reply, lang)
        if turn.recipe is not None:
            st.current_recipe_slug = turn.recipe.slug
        current = self._current(st)
        st.last_analysis = {
            "last_message": message,
            "lang": lang,
            "pantry_mode": pantry_mode,
            "intent": intent,
            "ingredient_tokens": tokens,
            "matched_count": len(turn.results),
            "matched_names": [r.name_en for r in turn.results[:5]],
            "last_recipe": current.name_en if current else None,
        }
        return self._out(st, turn.reply, intent=intent, lang=lang, results=turn.results)

    def _on_pantry(self, message: str, tokens: List[str], lang: str) -> _Turn:
        context = extract_context_hints(message)
        matches = find_matches_by_ingredients(
            self.recipes, tokens, context=context, limit=self.max_pantry_suggestions
        )
        if not matches:
            return _Turn(self.composer.pantry_fallback(tokens, lang))
        return _Turn(
            self.composer.pantry_reply(tokens, matches, lang),
            recipe=matches[0].recipe,
            results=[m.recipe for m in matches],
        )

    # ------------------------------------------------------------------
    # intent handlers
    # ------------------------------------------------------------------
    def _on_greeting(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        return _Turn(self.composer.greet(lang))

    def _on_how_to_make(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        results = self._search_terms(message)
        recipe = self._named_recipe(message) or (results[0] if results else None)
        if recipe is None and not content_terms(message):
            recipe = self._current(st)
        if recipe is None:
            return _Turn(self.composer.structured_reply(message, None, lang, self._suggestions(None, results)))
        reply = self.composer.structured_reply(message, recipe, lang, self._suggestions(recipe, results))
        return _Turn(reply, recipe=recipe, results=results or [recipe])

    def _on_ingredients(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        recipe = self._subject(message, st)
        if recipe is None:
            return _Turn(self.composer.clarify_recipe(lang))
        return _Turn(self.composer.ingredients_reply(recipe, lang), recipe=recipe, results=[recipe])

    def _on_dietary_info(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        recipe = self._subject(message, st)
        if recipe is None:
            return _Turn(self.composer.clarify_recipe(lang))
        reply = self.composer.dietary_reply(recipe, rule.payload.get("aspect", ""), lang, rule.payload.get("item"))
        return _Turn(reply, recipe=recipe, results=[recipe])

    def _on_nutrition(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        recipe = self._subject(message, st)
        if recipe is None:
            return _Turn(self.composer.clarify_recipe(lang))
        return _Turn(self.composer.nutrition_reply(recipe, lang), recipe=recipe, results=[recipe])

    def _on_substitution(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        recipe = self._subject(message, st)
        reply = self.composer.substitution_reply(recipe, message, lang)
        return _Turn(reply, recipe=recipe, results=[recipe] if recipe else [])

    def _on_meal_type(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        meal_type = rule.payload.get("meal_type")
        results = [r for r in self.recipes if r.meal_type == meal_type]
        context = extract_context_hints(message)
        if context.diet:
            results = [r for r in results if diet_compatible(r, context.diet)]
        if "quick" in message.lower():
            results = sorted(
                (r for r in results if r.total_time_minutes < 30), key=lambda r: r.total_time_minutes
            )
        heading = f"🍽️ {meal_type}"
        reply = self.composer.recipe_list_reply(heading, results, lang)
        return _Turn(reply, recipe=results[0] if results else None, results=results)

    def _on_time(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        low = message.lower()
        if ("quick" in low or "fast" in low) and self._mentioned_recipe(message) is None:
            # "quick vegan dinner" lists recipes; "is it quick?" asks about the current one
            if search_terms(message) or self._current(st) is None:
                pool = self._search_terms(message) if search_terms(message) else self.recipes
                results = sorted(
                    (r for r in pool if r.total_time_minutes < 30), key=lambda r: r.total_time_minutes
                )
                reply = self.composer.recipe_list_reply("⏱️ < 30 min", results, lang)
                return _Turn(reply, recipe=results[0] if results else None, results=results)
        recipe = self._subject(message, st)
        if recipe is not None:
            return _Turn(self.composer.time_reply(recipe, lang), recipe=recipe, results=[recipe])
        return _Turn(self.composer.clarify_recipe(lang))

    def _on_tips(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        recipe = self._subject(message, st)
        return _Turn(self.composer.tips_reply(recipe, lang), recipe=recipe, results=[recipe] if recipe else [])

    def _on_favorites(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        slugs = self.favorites.get_all() if self.favorites is not None else []
        recipes = [r for r in (self.recipe_repo.by_slug(s) for s in slugs) if r is not None]
        return _Turn(self.composer.favorites_reply(recipes, lang), results=recipes)

    def _on_follow_up(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        named = self._named_recipe(message)
        if named is not None:
            reply = self.composer.structured_reply(message, named, lang, self._suggestions(named, []))
            return _Turn(reply, recipe=named, results=[named])
        results = self._search_terms(message)
        current = self._current(st)
        if results and (current is None or results[0].slug != current.slug):
            top = results[0]
            reply = self.composer.structured_reply(message, top, lang, self._suggestions(top, results))
            return _Turn(reply, recipe=top, results=results)
        if current is None:
            return _Turn(self.composer.clarify_recipe(lang))
        similar = self.search_engine.similar(current, limit=3)
        return _Turn(self.composer.follow_up_reply(current, lang, similar), results=[current])

    def _on_recipe_search(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        results = self._search_terms(message)
        if not results:
            if search_terms(message):
                return self._on_unknown(message, rule, st, lang)
            # "show me a recipe": nothing specific asked, offer a few
            picks = get_random(self.recipes, self.composer.max_suggestions, rng=self.composer.rng)
            return _Turn(self.composer.recipe_list_reply("👨‍🍳", picks, lang), results=list(picks))
        top = results[0]
        reply = self.composer.structured_reply(message, top, lang, self._suggestions(top, results))
        return _Turn(reply, recipe=top, results=results)

    def _on_unknown(self, message: str, rule: RuleResult, st: SessionState, lang: str) -> _Turn:
        results = self._search_terms(message)
        if not results:
            results = [r for r, _ in self.fuzzy.match(" ".join(content_terms(message)) or message)]
        if not results:
            return _Turn(self.composer.help(lang))
        top = results[0]
        reply = self.composer.structured_reply(message, top, lang, self._suggestions(top, results))
        return _Turn(reply, recipe=top, results=results)

    # ------------------------------------------------------------------
    # recipe resolution
    # ------------------------------------------------------------------
    def _current(self, st: SessionState) -> Optional[Recipe]:
        if st.current_recipe_slug is None:
            return None
        return self.recipe_repo.by_slug(st.current_recipe_slug)

    def _search_terms(self, message: str) -> List[Recipe]:
        terms = search_terms(message)
        if not terms:
            return []
        diet = extract_context_hints(message).diet
        if diet is None:
            return self.search_engine.search(" ".join(terms))
        # diet words filter the pool; "vegetarian" admits vegan dishes too
        rest = [t for t in terms if t not in DIET_WORDS]
        pool = self.search_engine.search(" ".join(rest)) if rest else self.recipes
        return [r for r in pool if diet_compatible(r, diet)]

    def _has_search_hit(self, message: str) -> bool:
        return bool(self._search_terms(message))

    def _mentioned_recipe(self, message: str) -> Optional[Recipe]:
        """Recipe whose full name or slug the message mentions, longest name first."""
        low = message.lower()
        by_len = sorted(self.recipes, key=lambda r: -len(r.name_en))
        for r in by_len:
            names = [n.lower() for n in (r.name_en, r.name_local) if n]
            if any(n in low for n in names) or r.slug in low:
                return r
        return None

    def _named_recipe(self, message: str) -> Optional[Recipe]:
        mentioned = self._mentioned_recipe(message)
        if mentioned is not None:
            return mentioned
        terms = content_terms(message)
        if not terms:
            return None
        best, best_hits = None, 0
        for r in self.recipes:
            hits = len([t for t in terms if t in r.name_en.lower()])
            if hits > best_hits:
                best, best_hits = r, hits
        return best

    def _subject(self, message: str, st: SessionState) -> Optional[Recipe]:
        return self._named_recipe(message) or self._current(st)

    def _suggestions(self, recipe: Optional[Recipe], results: List[Recipe]) -> List[Recipe]:
        limit = self.composer.max_suggestions
        skip = recipe.slug if recipe is not None else None
        related = [r for r in results if r.slug != skip]
        if related:
            return related[:limit]
        if recipe is not None and recipe.country_slug:
            alternates = [r for r in self.recipes if r.country_slug == recipe.country_slug and r.slug != skip]
            if alternates:
                return alternates[:3]
        return [r for r in self.recipes if r.slug != skip][:2]

    # ------------------------------------------------------------------
    # views
    # ------------------------------------------------------------------
    def _out(self, st: SessionState, reply: str, intent: str, lang: str, results: List[Recipe]) -> Dict[str, Any]:
        directives = parse_directives(reply)
        return {
            "session_id": st.session_id,
            "reply": reply,
            "role": "assistant",
            "intent": intent,
            "lang": lang,
            "rtl": rt.is_rtl(lang),
            "speech_lang": rt.speech_lang_code(lang),
            "speech_text": speech_text(reply),
            "recipes": [r.to_summary() for r in results[: self.composer.max_suggestions]],
            "directives": [
                {"type": "card" if isinstance(d, RecipeCard) else "link", **d.__dict__} for d in directives
            ],
            "available": True,
            "context": self._context_view(st),
        }

    def _notice(
        self,
        st: SessionState,
        reply: str,
        role: str = "assistant",
        lang: str = "en",
        available: bool = True,
        ignored: bool = False,
    ) -> Dict[str, Any]:
        return {
            "session_id": st.session_id,
            "reply": reply,
            "role": role,
            "intent": None,
            "lang": lang,
            "rtl": rt.is_rtl(lang),
            "speech_lang": rt.speech_lang_code(lang),
            "available": available,
            "ignored": ignored,
            "context": self._context_view(st),
        }

    def _context_view(self, st: SessionState) -> Dict[str, Any]:
        return {
            "current_recipe": st.current_recipe_slug,
            "detected_language": st.detected_language,
            "history_length": len(st.history),
            "is_loading": st.is_loading,
        }
