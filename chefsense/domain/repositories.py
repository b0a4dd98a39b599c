# chefsense/chefsense/domain/repositories.py
from __future__ import annotations
from typing import List, Protocol

from chefsense.domain.entities import Recipe


class RecipeReadRepo(Protocol):
    def all(self) -> List[Recipe]: ...

    def by_slug(self, slug: str) -> Recipe | None: ...


class FavoritesReader(Protocol):
    """Read-only view over the client's saved recipe slugs."""

    def is_favorite(self, slug: str) -> bool: ...

    def get_all(self) -> List[str]: ...
