from __future__ import annotations
import logging
import warnings
from typing import Sequence

import numpy as np
from scipy import sparse

from topicsweep.core.dtm.matrix import DocumentTermMatrix
from topicsweep.utils.exceptions import (
    VocabularyAlignmentError,
    VocabularyMismatchWarning,
)

logger = logging.getLogger(__name__)


def align_vocabulary(
    dtm: DocumentTermMatrix, vocabulary: Sequence[str]
) -> DocumentTermMatrix:
    """
    Re-express `dtm` over `vocabulary`: shared columns are moved into place,
    vocabulary terms absent from `dtm` are zero-filled, terms outside the
    vocabulary are dropped. A differing column set is reported with a
    VocabularyMismatchWarning.
    """
    vocabulary = tuple(vocabulary)
    target = {term: j for j, term in enumerate(vocabulary)}

    src, dst = [], []
    for i, term in enumerate(dtm.vocabulary):
        j = target.get(term)
        if j is not None:
            src.append(i)
            dst.append(j)

    # (n_terms x len(vocabulary)) 0/1 projection
    projection = sparse.csr_matrix(
        (np.ones(len(src), dtype=dtm.matrix.dtype), (src, dst)),
        shape=(dtm.n_terms, len(vocabulary)),
    )
    aligned = sparse.csr_matrix(dtm.matrix @ projection)

    have = set(dtm.vocabulary)
    missing = [t for t in vocabulary if t not in have]
    extra = [t for t in dtm.vocabulary if t not in target]
    if missing or extra:
        warning = VocabularyMismatchWarning(missing, extra)
        logger.warning(f"⚠️ {warning}")
        warnings.warn(warning, stacklevel=2)

    if aligned.sum() == 0:
        raise VocabularyAlignmentError(
            f"No counts left after aligning {dtm.n_documents} documents "
            f"to a vocabulary of {len(vocabulary)} terms"
        )

    return DocumentTermMatrix(
        matrix=aligned, document_ids=dtm.document_ids, vocabulary=vocabulary
    )
