from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

TERM_COUNT_COLUMNS = ["document_id", "lemma", "count"]


@dataclass(frozen=True, eq=False)
class TermFrequencies:
    term_counts: pd.DataFrame  # columns: TERM_COUNT_COLUMNS, count >= 1
    word_counts: pd.Series  # document_id -> surviving tokens
    empty_documents: Tuple[Hashable, ...] = ()

    @property
    def documents(self) -> List[Hashable]:
        return self.word_counts.index.tolist()


class FrequencyAggregator:
    """Per-document term counts and totals from a filtered token stream."""

    def __init__(self, term_column: str = "term"):
        self.term_column = term_column

    def aggregate(
        self,
        filtered: pd.DataFrame,
        documents: Optional[Iterable[Hashable]] = None,
    ) -> TermFrequencies:
        """
        documents: the full document set the stream was drawn from. Members
        without a surviving token are reported in empty_documents and get no
        TermCount rows.
        """
        for col in ("document_id", self.term_column):
            if col not in filtered.columns:
                raise KeyError(f"Column '{col}' not found in filtered tokens.")

        term_counts = (
            filtered.groupby(["document_id", self.term_column], sort=True)
            .size()
            .reset_index(name="count")
            .rename(columns={self.term_column: "lemma"})
        )
        term_counts["count"] = term_counts["count"].astype(int)
        term_counts = term_counts[TERM_COUNT_COLUMNS]

        word_counts = (
            term_counts.groupby("document_id", sort=True)["count"]
            .sum()
            .rename("word_count")
        )

        empty: Tuple[Hashable, ...] = ()
        if documents is not None:
            present = set(word_counts.index)
            empty = tuple(d for d in dict.fromkeys(documents) if d not in present)
            if empty:
                logger.warning(
                    f"{len(empty)} documents have no tokens left after filtering "
                    f"and are excluded: {list(empty)[:10]}"
                )

        return TermFrequencies(
            term_counts=term_counts.reset_index(drop=True),
            word_counts=word_counts,
            empty_documents=empty,
        )


def top_terms(freqs: TermFrequencies, n: int = 20) -> pd.DataFrame:
    """Corpus-wide raw frequency view: ['lemma', 'count'], most frequent first."""
    totals = (
        freqs.term_counts.groupby("lemma", sort=False)["count"].sum().reset_index()
    )
    return (
        totals.sort_values(["count", "lemma"], ascending=[False, True])
        .head(n)
        .reset_index(drop=True)
    )
