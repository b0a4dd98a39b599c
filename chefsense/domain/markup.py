# chefsense/chefsense/domain/markup.py
"""
Inline directives embedded in assistant replies.

The presentation layer expands these into links and cards; the core only
emits and parses them:

    [RECIPE_LINK:<slug>:<text>]
    [RECIPE_CARD:<slug>:<name>:<country>:<mealType>:<minutes> min]

Slug, name, country and meal type may not contain ':' or brackets, so the
encoders replace them with spaces before interpolation.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Union

_RE_LINK = re.compile(r"\[RECIPE_LINK:([^:\]]+):([^\]]+)\]")
_RE_CARD = re.compile(r"\[RECIPE_CARD:([^:\]]+):([^:\]]+):([^:\]]+):([^:\]]+):([^\]]+)\]")
_RE_ANY = re.compile(r"\[RECIPE_(?:LINK|CARD):[^\]]*\]")
_RE_UNSAFE = re.compile(r"[\[\]:\r\n]+")
_RE_MINUTES = re.compile(r"^\s*(\d+)\s*min\s*$")


@dataclass(frozen=True)
class RecipeLink:
    slug: str
    text: str


@dataclass(frozen=True)
class RecipeCard:
    slug: str
    name: str
    country: str
    meal_type: str
    total_minutes: int


Directive = Union[RecipeLink, RecipeCard]


def _clean(value: object) -> str:
    s = _RE_UNSAFE.sub(" ", str(value or ""))
    return " ".join(s.split()) or "-"


def encode_link(slug: str, text: str) -> str:
    # link text may contain ':' (the pattern only stops at ']')
    safe_text = " ".join(re.sub(r"[\[\]\r\n]+", " ", text or "").split()) or "-"
    return f"[RECIPE_LINK:{_clean(slug)}:{safe_text}]"


def encode_card(slug: str, name: str, country: str, meal_type: str, total_minutes: int) -> str:
    minutes = max(0, int(total_minutes or 0))
    return (
        f"[RECIPE_CARD:{_clean(slug)}:{_clean(name)}:{_clean(country)}:"
        f"{_clean(meal_type)}:{minutes} min]"
    )


def card_for(recipe) -> str:
    return encode_card(
        recipe.slug, recipe.name_en, recipe.country, recipe.meal_type, recipe.total_time_minutes
    )


def link_for(recipe, text: str) -> str:
    return encode_link(recipe.slug, text)


def _decode(match: re.Match) -> Directive | None:
    raw = match.group(0)
    m = _RE_CARD.fullmatch(raw)
    if m:
        mins = _RE_MINUTES.match(m.group(5))
        if mins is None:
            return None
        return RecipeCard(m.group(1), m.group(2), m.group(3), m.group(4), int(mins.group(1)))
    m = _RE_LINK.fullmatch(raw)
    if m:
        return RecipeLink(m.group(1), m.group(2))
    return None


def parse_directives(text: str) -> List[Directive]:
    """Return every well-formed directive in order of appearance."""
    out: List[Directive] = []
    for m in _RE_ANY.finditer(text or ""):
        d = _decode(m)
        if d is not None:
            out.append(d)
    return out


def to_plain_text(text: str) -> str:
    """Replace directives with their human-readable text (used for speech)."""

    def _sub(m: re.Match) -> str:
        d = _decode(m)
        if isinstance(d, RecipeLink):
            return d.text
        if isinstance(d, RecipeCard):
            return f"{d.name} ({d.country}, {d.total_minutes} min)"
        return ""

    return _RE_ANY.sub(_sub, text or "")
