from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable, Tuple

import pandas as pd
from scipy import sparse


@dataclass(frozen=True, eq=False)
class DocumentTermMatrix:
    matrix: sparse.csr_matrix  # raw counts, shape (documents, vocabulary)
    document_ids: Tuple[Hashable, ...]
    vocabulary: Tuple[str, ...]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    @property
    def n_documents(self) -> int:
        return len(self.document_ids)

    @property
    def n_terms(self) -> int:
        return len(self.vocabulary)

    @property
    def total_count(self) -> int:
        return int(self.matrix.sum())

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.matrix.toarray(),
            index=pd.Index(self.document_ids, name="document_id"),
            columns=list(self.vocabulary),
        )
