from __future__ import annotations
import logging
from typing import Hashable, Iterable, Optional

import numpy as np
import pandas as pd

from topicsweep.core.frequency.aggregator import TermFrequencies
from topicsweep.utils.exceptions import EmptyDocumentError

logger = logging.getLogger(__name__)

TFIDF_COLUMNS = ["document_id", "lemma", "tf", "idf", "tfidf"]


class TfIdfEngine:
    """
    tf(t,d)   = term_ct(t,d) / word_ct(d)
    idf(t,D)  = ln(N / n_t)
    tfidf     = tf * idf

    N and n_t are both counted over the same document set: the documents
    present in the frequencies, or `documents` when given.
    """

    def compute(
        self,
        freqs: TermFrequencies,
        documents: Optional[Iterable[Hashable]] = None,
    ) -> pd.DataFrame:
        counts = freqs.term_counts
        if documents is None:
            doc_set = freqs.documents
        else:
            doc_set = list(dict.fromkeys(documents))
            counts = counts[counts["document_id"].isin(doc_set)]

        word_ct = freqs.word_counts.reindex(doc_set, fill_value=0)
        empty = word_ct.index[word_ct <= 0].tolist()
        if empty:
            raise EmptyDocumentError(empty)

        n_docs = len(doc_set)
        if n_docs == 0:
            return pd.DataFrame(columns=TFIDF_COLUMNS)

        df = counts.merge(
            word_ct.rename("word_count"),
            left_on="document_id",
            right_index=True,
            how="left",
        )
        doc_freq = counts.groupby("lemma")["document_id"].nunique()

        df["tf"] = df["count"] / df["word_count"]
        df["idf"] = np.log(n_docs / df["lemma"].map(doc_freq).astype(float))
        df["tfidf"] = df["tf"] * df["idf"]

        out = (
            df[TFIDF_COLUMNS]
            .sort_values(
                ["document_id", "tfidf", "lemma"], ascending=[True, False, True]
            )
            .reset_index(drop=True)
        )
        logger.info(
            f"TF-IDF computed for {n_docs} documents, {len(doc_freq)} terms"
        )
        return out


def top_terms_per_document(table: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    ranked = table.sort_values(
        ["document_id", "tfidf", "lemma"], ascending=[True, False, True]
    )
    return ranked.groupby("document_id", sort=True).head(n).reset_index(drop=True)
