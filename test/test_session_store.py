from __future__ import annotations

import time

from chefsense.infrastructure.session_store import InMemorySessionStore


def test_get_or_create_returns_same_state():
    store = InMemorySessionStore()
    st = store.get_or_create("a")
    st.current_recipe_slug = "pad-thai"
    assert store.get_or_create("a") is st
    assert store.get_or_create("a").has_current_recipe


def test_expired_sessions_are_collected(monkeypatch):
    store = InMemorySessionStore(ttl_seconds=10)
    store.get_or_create("old")

    later = time.time() + 60
    monkeypatch.setattr(time, "time", lambda: later)
    store.get_or_create("new")

    assert store.get("old") is None
    assert store.get("new") is not None


def test_drop_and_history():
    store = InMemorySessionStore()
    st = store.get_or_create("a")
    st.append("user", "hi", "en")
    st.append("assistant", "Hello!", "en")
    assert [t.role for t in st.history] == ["user", "assistant"]

    store.drop("a")
    assert store.get("a") is None
