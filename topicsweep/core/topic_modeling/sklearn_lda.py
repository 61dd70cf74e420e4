from __future__ import annotations
from typing import Dict, List, Sequence

from sklearn.decomposition import LatentDirichletAllocation

from topicsweep.core.dtm.matrix import DocumentTermMatrix
from topicsweep.core.topic_modeling.base import ModelFitter
from topicsweep.core.topic_modeling.config import TopicModelConfig


class SklearnLDAFitter(ModelFitter):
    """
    scikit-learn LatentDirichletAllocation (variational Bayes).
    Deterministic for a fixed random_state.
    """

    def __init__(self, cfg: TopicModelConfig | None = None):
        self.cfg = cfg or TopicModelConfig(backend="sklearn")

    def fit(self, dtm: DocumentTermMatrix, k: int) -> LatentDirichletAllocation:
        lda = LatentDirichletAllocation(
            n_components=k,
            random_state=self.cfg.random_state,
            max_iter=self.cfg.max_iter,
            learning_method=self.cfg.learning_method,
        )
        lda.fit(dtm.matrix)
        return lda

    def perplexity(
        self, model: LatentDirichletAllocation, dtm: DocumentTermMatrix
    ) -> float:
        if model.components_.shape[1] != dtm.n_terms:
            raise ValueError(
                f"Model has {model.components_.shape[1]} terms, matrix has {dtm.n_terms}"
            )
        return float(model.perplexity(dtm.matrix))

    def describe(
        self, model: LatentDirichletAllocation, vocabulary: Sequence[str], topn: int = 10
    ) -> List[Dict]:
        topics: List[Dict] = []
        comp = model.components_  # shape: (n_topics, n_terms)
        for i, row in enumerate(comp):
            top_idx = row.argsort()[-topn:][::-1]
            words = [vocabulary[j] for j in top_idx]
            topics.append(
                {
                    "topic_id": str(i),
                    "keywords": ", ".join(words),
                    "label": f"Topic {i}",
                }
            )
        return topics
