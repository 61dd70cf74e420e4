from __future__ import annotations
import logging
from typing import List, Set

import pandas as pd
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from topicsweep.core.vocabulary.base import VocabularyFilter
from topicsweep.core.vocabulary.config import DTM_FILTER, VocabularyFilterConfig

logger = logging.getLogger(__name__)

TOKEN_COLUMNS = ("document_id", "surface_form", "lemma", "part_of_speech")

# unicode-aware: keeps accented letters, drops digits/underscore/punctuation
_NON_ALPHA_RE = r"[\W\d_]+"
_NUMERIC_RE = r"[0-9%]"


def _nltk_stopwords(language: str) -> Set[str]:
    import nltk

    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        nltk.download("stopwords", quiet=True)
    from nltk.corpus import stopwords as nltk_stopwords

    return set(nltk_stopwords.words(language))


def check_token_columns(tokens: pd.DataFrame) -> None:
    for col in TOKEN_COLUMNS:
        if col not in tokens.columns:
            raise KeyError(f"Column '{col}' not found in token stream.")


class DefaultVocabularyFilter(VocabularyFilter):
    """
    Adapter: vectorised pandas filter over the token stream.
      - stop words matched case-insensitively on the lemma (and on the term)
      - punctuation-tagged tokens dropped
      - numeric-like tokens dropped when drop_numeric
      - term = lower(lemma), non-alphabetic chars stripped when strip_non_alpha
      - terms shorter than min_length dropped
    """

    def __init__(self, config: VocabularyFilterConfig | None = None):
        self.cfg = config or DTM_FILTER
        self._stopset = self._build_stopset()
        self._allowed = (
            {w.lower() for w in self.cfg.allowed_terms}
            if self.cfg.allowed_terms is not None
            else None
        )

    def _build_stopset(self) -> Set[str]:
        if self.cfg.stopword_source == "nltk":
            base = {w.lower() for w in _nltk_stopwords(self.cfg.language)}
        else:
            base = set(ENGLISH_STOP_WORDS)

        base |= {w.lower() for w in self.cfg.custom_stopwords}
        base -= {w.lower() for w in self.cfg.exclude_stopwords}
        return base

    def _terms(self, lemma: pd.Series) -> pd.Series:
        if self.cfg.strip_non_alpha:
            return lemma.str.replace(_NON_ALPHA_RE, "", regex=True)
        return lemma

    def apply(self, tokens: pd.DataFrame) -> pd.DataFrame:
        check_token_columns(tokens)

        lemma = tokens["lemma"].fillna("").astype(str).str.lower()
        keep = ~lemma.isin(self._stopset)

        if self.cfg.punctuation_tags:
            keep &= ~tokens["part_of_speech"].isin(self.cfg.punctuation_tags)

        if self.cfg.drop_numeric:
            surface = tokens["surface_form"].fillna("").astype(str)
            keep &= ~(
                surface.str.contains(_NUMERIC_RE, regex=True)
                | lemma.str.contains(_NUMERIC_RE, regex=True)
            )

        term = self._terms(lemma)
        keep &= term.str.len() >= self.cfg.min_length
        keep &= ~term.isin(self._stopset)
        if self._allowed is not None:
            keep &= term.isin(self._allowed)

        out = tokens.loc[keep].copy()
        out["term"] = term.loc[keep]
        out = out.reset_index(drop=True)

        logger.info(
            f"Vocabulary filter kept {len(out)}/{len(tokens)} tokens "
            f"({out['term'].nunique()} distinct terms)"
        )
        return out

    def vocabulary(self, filtered: pd.DataFrame) -> List[str]:
        if "term" not in filtered.columns:
            raise KeyError("Column 'term' not found. Run apply() first.")
        return sorted(filtered["term"].unique().tolist())
