from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from topicsweep.core.dtm.matrix import DocumentTermMatrix


class ModelFitter(ABC):
    """
    Port: the external topic-model capability. Implementations must not keep
    per-call state on self; the sweep calls them from several threads.
    """

    @abstractmethod
    def fit(self, dtm: DocumentTermMatrix, k: int) -> Any: ...

    @abstractmethod
    def perplexity(self, model: Any, dtm: DocumentTermMatrix) -> float:
        """
        Held-out perplexity of `dtm` under `model` (lower is better).
        `dtm` must share the vocabulary the model was fitted on.
        """
        ...

    @abstractmethod
    def describe(self, model: Any, vocabulary, topn: int = 10) -> List[Dict]:
        """
        Returns topic summary list: [{topic_id, keywords, label}, ...]
        """
        ...
