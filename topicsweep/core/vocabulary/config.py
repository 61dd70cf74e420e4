from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Literal, Optional


@dataclass(frozen=True)
class VocabularyFilterConfig:
    stopword_source: Literal["sklearn", "nltk"] = "sklearn"
    language: str = "english"  # nltk only
    custom_stopwords: FrozenSet[str] = field(default_factory=frozenset)
    exclude_stopwords: FrozenSet[str] = field(
        default_factory=frozenset
    )  # words to keep even if in list
    punctuation_tags: FrozenSet[str] = frozenset({"PUNCT"})
    strip_non_alpha: bool = True  # strip before the length check
    min_length: int = 3
    drop_numeric: bool = False  # drop tokens carrying digits or '%'
    allowed_terms: Optional[FrozenSet[str]] = None  # controlled vocabulary


# Document-term matrix preset: "covid19" -> "covid", "x-ray" -> "xray"
DTM_FILTER = VocabularyFilterConfig(strip_non_alpha=True, drop_numeric=False)

# Raw frequency views: numeric-like tokens go, surface punctuation inside
# lemmas is kept as-is.
FREQUENCY_FILTER = VocabularyFilterConfig(strip_non_alpha=False, drop_numeric=True)
