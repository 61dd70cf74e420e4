from __future__ import annotations
import logging
from typing import List, Tuple

import pandas as pd
import nltk
from nltk import pos_tag
from nltk.stem import WordNetLemmatizer
from nltk.tokenize import wordpunct_tokenize

from topicsweep.core.tagging.base import TokenTagger
from topicsweep.core.tagging.config import TaggingConfig

logger = logging.getLogger(__name__)

# Penn Treebank tags for punctuation and brackets
_PENN_PUNCT = {".", ",", ":", "``", "''", "(", ")", "-LRB-", "-RRB-", "#", "$"}

_NLTK_PACKAGES = {
    "taggers/averaged_perceptron_tagger_eng": "averaged_perceptron_tagger_eng",
    "corpora/wordnet": "wordnet",
}


def _to_wn_pos(tag: str):
    # Penn tag -> WordNet POS
    if tag.startswith("J"):
        return "a"  # ADJ
    if tag.startswith("V"):
        return "v"  # VERB
    if tag.startswith("N"):
        return "n"  # NOUN
    if tag.startswith("R"):
        return "r"  # ADV
    return "n"  # default


def _universal_tag(tag: str, token: str) -> str:
    if tag in _PENN_PUNCT or not any(ch.isalnum() for ch in token):
        return "PUNCT"
    return tag


class NltkTokenTagger(TokenTagger):
    """Adapter: NLTK wordpunct tokenizer + perceptron POS tagger + WordNet lemmas."""

    def __init__(self, config: TaggingConfig | None = None):
        self.cfg = config or TaggingConfig()
        if self.cfg.download_missing:
            self._ensure_data()
        self._wn = WordNetLemmatizer()

    @staticmethod
    def _ensure_data():
        for path, package in _NLTK_PACKAGES.items():
            try:
                nltk.data.find(path)
            except LookupError:
                logger.info(f"Downloading NLTK package '{package}'")
                nltk.download(package, quiet=True)

    def _tag_text(self, text: str) -> List[Tuple[str, str, str]]:
        toks = wordpunct_tokenize(text or "")
        if self.cfg.lowercase:
            toks = [t.lower() for t in toks]
        if not toks:
            return []
        out = []
        for token, tag in pos_tag(toks):
            pos = _universal_tag(tag, token)
            lemma = token if pos == "PUNCT" else self._wn.lemmatize(token.lower(), _to_wn_pos(tag))
            out.append((token, lemma, pos))
        return out

    def tag(self, documents: pd.DataFrame) -> pd.DataFrame:
        for col in ("document_id", self.cfg.text_column):
            if col not in documents.columns:
                raise KeyError(f"Column '{col}' not found in documents.")

        rows = []
        for doc_id, text in zip(documents["document_id"], documents[self.cfg.text_column]):
            for surface, lemma, pos in self._tag_text("" if pd.isna(text) else str(text)):
                rows.append(
                    {
                        "document_id": doc_id,
                        "surface_form": surface,
                        "lemma": lemma,
                        "part_of_speech": pos,
                    }
                )
        logger.info(f"Tagged {len(documents)} documents into {len(rows)} tokens")
        return pd.DataFrame(
            rows, columns=["document_id", "surface_form", "lemma", "part_of_speech"]
        )
