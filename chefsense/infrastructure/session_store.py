# =========================
# FILE: chefsense/chefsense/infrastructure/session_store.py
# =========================
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from chefsense.domain.entities import ConversationTurn


@dataclass
class SessionState:
    session_id: str
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    # dialogue context
    history: List[ConversationTurn] = field(default_factory=list)
    current_recipe_slug: Optional[str] = None
    detected_language: str = "en"
    last_analysis: Optional[Dict[str, Any]] = None

    opened: bool = False
    is_loading: bool = False

    @property
    def has_current_recipe(self) -> bool:
        return self.current_recipe_slug is not None

    def append(self, role: str, content: str, lang: str = "en", debug: bool = False) -> None:
        self.history.append(ConversationTurn(role=role, content=content, lang=lang, debug=debug))


class InMemorySessionStore:
    def __init__(self, ttl_seconds: int = 1800) -> None:
        self.ttl_seconds = ttl_seconds
        self._data: Dict[str, SessionState] = {}

    def get_or_create(self, session_id: str) -> SessionState:
        self._gc()
        st = self._data.get(session_id)
        if st is None:
            st = SessionState(session_id=session_id)
            self._data[session_id] = st
        st.updated_at = time.time()
        return st

    def get(self, session_id: str) -> SessionState | None:
        return self._data.get(session_id)

    def save(self, st: SessionState) -> None:
        st.updated_at = time.time()
        self._data[st.session_id] = st

    def drop(self, session_id: str) -> None:
        self._data.pop(session_id, None)

    def _gc(self) -> None:
        now = time.time()
        expired = [k for k, v in self._data.items() if now - v.updated_at > self.ttl_seconds]
        for k in expired:
            self._data.pop(k, None)
