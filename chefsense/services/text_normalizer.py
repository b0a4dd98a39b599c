# chefsense/chefsense/services/text_normalizer.py
from __future__ import annotations

import re
from typing import List

_SPLIT_RE = re.compile(r"[,\s]+")
# letters (incl. accented / Arabic) with inner hyphens or apostrophes
_WORD_RE = re.compile(r"[^\W\d_]+(?:[-'’][^\W\d_]+)*", re.UNICODE)
_LIST_JOINERS_RE = re.compile(r"\s+(?:and|or|plus|et|en|of)\s+|&|;|/", re.IGNORECASE)

# Words that never name an ingredient in a pantry message.
PANTRY_STOP_WORDS = frozenset(
    """
    a an the and or but plus also just only some any few little bit lot lots of on in at to for
    from with without into i i've ive im i'm me my mine we we've our you your it its is are be
    have has had got get getting need want like would could should will can do does did
    what which how please there that this these those here something anything
    cook cooking cooked make making made prepare recipe recipes idea ideas suggest suggestion
    suggestions dish dishes meal meals food using use left leftover leftovers fridge pantry
    tonight today now quick easy healthy tasty good nice simple
    vegan vegetarian gluten free gluten-free dairy-free salad soup stew broth dessert sweet
    breakfast lunch dinner snack
    """.split()
)

# Question vocabulary stripped before resolving which recipe a message names.
QUESTION_STOP_WORDS = PANTRY_STOP_WORDS | frozenset(
    """
    hello hi hey hallo bonjour salut merci thanks thank
    how many much long many calories calorie kcal protein proteins carbs carb fat fats
    nutrition nutritional nutrients health healthier ingredients ingredient
    steps step instructions instruction prepare preparing substitute substitutes substitution
    replace replacement alternative alternatives instead swap swaps tips tip tricks trick advice
    favorite favourite favorites favourites saved bookmarked bookmark time minutes minute
    duration hours hour take takes taking about show find give tell see list which
    contain contains containing safe allergy allergies allergen allergens
    high low carb low-carb high-protein keto halal dairy appetizer drink drinks
    need needed require required way best really very more less
    recette recept cuisine keuken
    """.split()
)

# Filler stripped before keyword search. Diet, meal and dish words stay searchable.
SEARCH_STOP_WORDS = frozenset(
    """
    a an the and or but plus also just only some any few little bit lot lots of on in at to for
    from with without into i i've ive im i'm me my mine we we've our you your it its is are be
    have has had got get getting need want like would could should will can do does did
    what which how please there that this these those here something anything one ones
    hello hi hey thanks thank show find give tell see list about really very more other
    cook cooking cooked make making made prepare recipe recipes idea ideas option options
    suggest suggestion suggestions recommend dish dishes meal meals food
    tonight today now quick quickly fast
    recette recettes recept recepten
    """.split()
)


def tokenize(text: str) -> List[str]:
    """Lower-case and split on commas/whitespace; empty tokens dropped."""
    return [t for t in _SPLIT_RE.split((text or "").lower()) if t]


def words(text: str) -> List[str]:
    return _WORD_RE.findall((text or "").lower())


def extract_ingredient_tokens(text: str) -> List[str]:
    """
    Loose ingredient extraction for pantry messages.

    No controlled vocabulary: the message is split on commas and list joiners,
    filler words are dropped and what remains is treated as an ingredient.
    Order of first appearance is kept, duplicates removed.
    """
    chunks = _LIST_JOINERS_RE.sub(",", (text or "").lower()).split(",")
    out: List[str] = []
    seen = set()
    for chunk in chunks:
        for w in _WORD_RE.findall(chunk):
            w = w.replace("’", "'")
            if len(w) < 3 or w in PANTRY_STOP_WORDS:
                continue
            if w not in seen:
                seen.add(w)
                out.append(w)
    return out


def content_terms(text: str) -> List[str]:
    """Words of a message that could name a dish, cuisine or ingredient."""
    out: List[str] = []
    for w in words(text):
        w = w.replace("’", "'")
        if len(w) < 2 or w in QUESTION_STOP_WORDS or w in out:
            continue
        out.append(w)
    return out


def search_terms(text: str) -> List[str]:
    """
    Words of a message worth sending to the keyword search.

    Unlike `content_terms`, diet, meal and dish words are kept: they match
    recipe tags and descriptions ("vegan", "gluten-free", "soup", "dessert").
    Time words are dropped, the time handler filters on minutes instead.
    """
    out: List[str] = []
    for w in words(text):
        w = w.replace("’", "'")
        if len(w) < 2 or w in SEARCH_STOP_WORDS or w in out:
            continue
        out.append(w)
    return out


def first_clause(text: str) -> str:
    return re.split(r"[.!?]", text or "", maxsplit=1)[0].strip()
