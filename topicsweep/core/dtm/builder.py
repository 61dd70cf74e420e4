from __future__ import annotations
import logging
from typing import Hashable, Iterable, Optional

import numpy as np
import pandas as pd
from scipy import sparse

from topicsweep.core.dtm.matrix import DocumentTermMatrix

logger = logging.getLogger(__name__)


class DocumentTermMatrixBuilder:
    """
    Builds a sparse count matrix from TermCount rows, restricted to a
    document subset. Rows and columns are sorted. Columns are exactly the
    lemmas seen inside the subset, so two subsets generally disagree on
    columns; use align_vocabulary() where a shared vocabulary is needed.
    """

    def build(
        self,
        term_counts: pd.DataFrame,
        documents: Optional[Iterable[Hashable]] = None,
    ) -> DocumentTermMatrix:
        counts = term_counts
        if documents is not None:
            counts = counts[counts["document_id"].isin(list(dict.fromkeys(documents)))]
        counts = counts[counts["count"] > 0]

        doc_ids = sorted(counts["document_id"].unique().tolist())
        vocab = sorted(counts["lemma"].unique().tolist())

        rows = pd.Categorical(counts["document_id"], categories=doc_ids).codes
        cols = pd.Categorical(counts["lemma"], categories=vocab).codes
        matrix = sparse.csr_matrix(
            (counts["count"].to_numpy(dtype=np.int64), (rows, cols)),
            shape=(len(doc_ids), len(vocab)),
        )

        logger.info(
            f"Built document-term matrix: {len(doc_ids)} documents x {len(vocab)} terms"
        )
        return DocumentTermMatrix(
            matrix=matrix, document_ids=tuple(doc_ids), vocabulary=tuple(vocab)
        )
