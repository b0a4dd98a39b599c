from __future__ import annotations

import logging
import uvicorn
from fastapi import FastAPI
from dotenv import load_dotenv
load_dotenv()
from chefsense.api.routes import router
from chefsense.core.config import (
    FAVORITES_JSON_PATH,
    HOST,
    MAX_PANTRY_SUGGESTIONS,
    MAX_SUGGESTIONS,
    MAX_SWAPS_DISPLAYED,
    PORT,
    RECIPES_JSON_PATH,
    RESPONSE_DELAY_MS,
    SEARCH_CACHE_TTL_S,
    SESSION_TTL_SECONDS,
)

from chefsense.domain.repositories import FavoritesReader, RecipeReadRepo
from chefsense.infrastructure.json_repositories import JsonRecipeRepository
from chefsense.infrastructure.favorites_store import JsonFavoritesStore
from chefsense.infrastructure.session_store import InMemorySessionStore
from chefsense.services.search_engine import RecipeSearchEngine
from chefsense.services.fuzzy_matcher import FuzzyRecipeMatcher
from chefsense.application.usecases import BrowseRecipes, FindSimilarRecipes, GetRecipeDetail
from chefsense.application.response_composer import ResponseComposer
from chefsense.application.dialogue_manager import DialogueManager

log = logging.getLogger("app")


def wire(
    app: FastAPI,
    recipe_repo: RecipeReadRepo,
    favorites: FavoritesReader,
    response_delay_s: float,
) -> None:
    search_engine = RecipeSearchEngine(recipe_repo, cache_ttl_s=SEARCH_CACHE_TTL_S)
    fuzzy = FuzzyRecipeMatcher(recipe_repo.all())
    composer = ResponseComposer(max_swaps=MAX_SWAPS_DISPLAYED, max_suggestions=MAX_SUGGESTIONS)
    sessions = InMemorySessionStore(ttl_seconds=SESSION_TTL_SECONDS)

    dialogue_manager = DialogueManager(
        sessions=sessions,
        recipe_repo=recipe_repo,
        search_engine=search_engine,
        favorites=favorites,
        composer=composer,
        fuzzy=fuzzy,
        response_delay_s=response_delay_s,
        max_pantry_suggestions=MAX_PANTRY_SUGGESTIONS,
    )

    # DI for routes.py
    app.state.dialogue_manager = dialogue_manager
    app.state.browse_uc = BrowseRecipes(search_engine)
    app.state.recipe_detail_uc = GetRecipeDetail(recipe_repo)
    app.state.similar_uc = FindSimilarRecipes(search_engine)


def create_app(
    recipe_repo: RecipeReadRepo | None = None,
    favorites: FavoritesReader | None = None,
    response_delay_s: float | None = None,
) -> FastAPI:
    app = FastAPI(title="ChefSense")
    app.include_router(router)

    @app.on_event("startup")
    def on_startup() -> None:
        repo = recipe_repo if recipe_repo is not None else JsonRecipeRepository(RECIPES_JSON_PATH)
        favs = favorites if favorites is not None else JsonFavoritesStore(FAVORITES_JSON_PATH)
        delay = response_delay_s if response_delay_s is not None else RESPONSE_DELAY_MS / 1000.0
        wire(app, repo, favs, delay)
        log.info("Startup complete | recipes=%d", len(repo.all()))

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT, reload=False)
