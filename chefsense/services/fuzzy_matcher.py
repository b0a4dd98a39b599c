# =========================
# FILE: chefsense/chefsense/services/fuzzy_matcher.py
# (char n-gram TF-IDF for misspelled dish / ingredient names)
# =========================
from __future__ import annotations

from typing import List, Sequence, Tuple
import logging
import re
import unicodedata

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import linear_kernel

from chefsense.domain.entities import Recipe

log = logging.getLogger("services.fuzzy_matcher")


def _strip_accents(s: str) -> str:
    s = unicodedata.normalize("NFD", s)
    return "".join(ch for ch in s if unicodedata.category(ch) != "Mn")


def _normalize(text: str) -> str:
    t = _strip_accents((text or "").lower().strip())
    t = re.sub(r"[^0-9a-z\s\-']", " ", t)
    return re.sub(r"\s+", " ", t).strip()


class FuzzyRecipeMatcher:
    """
    Last-resort matcher used when keyword search finds nothing.

    Recipes are indexed on name, country, tags and ingredient names with
    character n-grams (char_wb 3-5), which tolerates typos and spacing
    ("paad thai", "butterchicken") where substring scoring gives 0.
    """

    def __init__(self, recipes: Sequence[Recipe], min_score: float = 0.2) -> None:
        self.recipes = list(recipes)
        self.min_score = min_score
        self.vectorizer = None
        self.doc_matrix = None
        if self.recipes:
            self._build_index()

    def _build_index(self) -> None:
        corpus: List[str] = []
        for r in self.recipes:
            corpus.append(
                " ".join(
                    [
                        r.name_en,
                        r.name_en,  # name counts twice
                        r.name_local,
                        r.country,
                        " ".join(r.tags),
                        " ".join(i.name for i in r.ingredients),
                    ]
                )
            )
        self.vectorizer = TfidfVectorizer(
            analyzer="char_wb",
            preprocessor=_normalize,
            ngram_range=(3, 5),
            min_df=1,
        )
        self.doc_matrix = self.vectorizer.fit_transform(corpus)
        log.info("FuzzyRecipeMatcher indexed %d recipes | dim=%d", len(self.recipes), self.doc_matrix.shape[1])

    def match(self, query: str, top_k: int = 3) -> List[Tuple[Recipe, float]]:
        if self.vectorizer is None or not _normalize(query):
            return []
        q = self.vectorizer.transform([query])
        # tf-idf rows are L2-normalized, so the dot product is cosine similarity
        sims = linear_kernel(q, self.doc_matrix).ravel().astype(np.float32)
        order = np.argsort(-sims, kind="stable")[:top_k]
        return [(self.recipes[int(i)], float(sims[i])) for i in order if sims[i] >= self.min_score]
