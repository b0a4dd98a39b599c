# chefsense/chefsense/infrastructure/favorites_store.py
from __future__ import annotations

import logging
from typing import Iterable, List

import ujson as json

from chefsense.domain.repositories import FavoritesReader

log = logging.getLogger("infra.favorites")


class InMemoryFavoritesStore(FavoritesReader):
    def __init__(self, slugs: Iterable[str] = ()) -> None:
        self._slugs: List[str] = []
        for s in slugs:
            if s and s not in self._slugs:
                self._slugs.append(s)

    def is_favorite(self, slug: str) -> bool:
        return slug in self._slugs

    def get_all(self) -> List[str]:
        return list(self._slugs)


class JsonFavoritesStore(InMemoryFavoritesStore):
    """Favorites exported by the client as a JSON list of slugs."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(self._load(path))

    @staticmethod
    def _load(path: str) -> List[str]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError):
            log.exception("Error reading favorites from %s", path)
            return []
        if not isinstance(data, list):
            log.warning("Favorites file %s is not a list", path)
            return []
        return [str(s) for s in data]
